"""
Tick-time conversion

OptiFine expresses sky fade times as 24-hour clock strings (``"HH:MM"``), while
FabricSkyboxes expects world ticks. A Minecraft day is 24000 ticks and tick 0
is 06:00, so one hour is 1000 ticks and one minute is 1000/60 ticks.
"""

import re
from typing import Optional

TICKS_PER_DAY = 24000
TICKS_PER_HOUR = 1000
# Tick 0 is sunrise at 06:00
TICK_OFFSET = 6 * TICKS_PER_HOUR

_CLOCK_RE = re.compile(r"^\s*(-?\d+):(\d+)\s*$")
_TICKS_RE = re.compile(r"^\s*(-?\d+)\s*$")


def to_tick_time(value: Optional[str]) -> Optional[int]:
    """
    Convert a legacy time value to ticks.

    Accepts ``"HH:MM"`` clock times and bare integer tick counts. The result
    is not wrapped into a single day, so times before 06:00 are negative.

    Args:
        value: Raw property value

    Returns:
        Tick count, or None if the value is not a recognised time

    Examples:
        >>> to_tick_time("06:00")
        0
        >>> to_tick_time("18:30")
        12500
        >>> to_tick_time("05:00")
        -1000
    """
    if value is None:
        return None

    match = _CLOCK_RE.match(value)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        # Truncate toward zero like an integer cast of the fractional tick
        return int(hours * TICKS_PER_HOUR + minutes * TICKS_PER_HOUR / 60 - TICK_OFFSET)

    match = _TICKS_RE.match(value)
    if match:
        return int(match.group(1))

    return None


def normalize_tick_time(ticks: int) -> int:
    """Wrap a tick count into a single day, ``[0, 24000)``"""
    return ticks % TICKS_PER_DAY
