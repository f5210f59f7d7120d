"""
OptiFine sky properties -> FabricSkyboxes manifest

Property reference (OptiFine ``sky*.properties``):
- startFadeIn / endFadeIn / endFadeOut: required fade times (``HH:MM``)
- startFadeOut: optional, derived from the other three when absent
- rotate: rotate the sky with the sun
- speed: rotation speed multiplier
- axis: rotation axis as three fractions of a half turn
- weather, biomes: space-separated condition lists
- source: atlas texture, resolved by the locator
"""

import logging
import math
from typing import Any, Dict, List, Optional, Union

from skyport.converters.sky.locator import PRIMARY_WORLD
from skyport.exceptions import MappingError
from skyport.schema.skybox import FACES, SkyboxManifest
from skyport.ticks import normalize_tick_time, to_tick_time

logger = logging.getLogger(__name__)

OVERWORLD = "minecraft:overworld"
DEFAULT_AXIS = [0.0, 0.0, 180.0]  # South


def has_directives(properties: Dict[str, str]) -> bool:
    """A layer with a single property carries nothing worth converting"""
    return len(properties) > 1


def _required_ticks(properties: Dict[str, str], key: str) -> int:
    if key not in properties:
        raise MappingError(f"Missing required property: {key}")
    ticks = to_tick_time(properties[key])
    if ticks is None:
        raise MappingError(f"Invalid time for {key}: {properties[key]!r}")
    return ticks


def map_fade_window(properties: Dict[str, str]) -> Dict[str, int]:
    """
    Compute the four fade times, normalized into a single day.

    When ``startFadeOut`` is missing, the fade-out lasts as long as the fade-in:
    ``endFadeOut - (endFadeIn - startFadeIn)``. If that lands inside the
    fade-in window the sky fades out instantly at ``endFadeOut``.

    Raises:
        MappingError: If a required time is missing or unparsable
    """
    start_fade_in = _required_ticks(properties, "startFadeIn")
    end_fade_in = _required_ticks(properties, "endFadeIn")
    end_fade_out = _required_ticks(properties, "endFadeOut")

    if "startFadeOut" in properties:
        start_fade_out = _required_ticks(properties, "startFadeOut")
    else:
        start_fade_out = end_fade_out - (end_fade_in - start_fade_in)
        if start_fade_in <= start_fade_out <= end_fade_in:
            logger.debug(f"Derived startFadeOut {start_fade_out} overlaps fade-in, using endFadeOut")
            start_fade_out = end_fade_out

    return {
        "startFadeIn": normalize_tick_time(start_fade_in),
        "endFadeIn": normalize_tick_time(end_fade_in),
        "startFadeOut": normalize_tick_time(start_fade_out),
        "endFadeOut": normalize_tick_time(end_fade_out),
    }


def _parse_float(key: str, value: str) -> float:
    try:
        # Digit separators are not part of the OptiFine number syntax
        if "_" in value:
            raise ValueError(value)
        number = float(value)
    except ValueError:
        raise MappingError(f"Invalid number for {key}: {value!r}") from None
    if not math.isfinite(number):
        raise MappingError(f"Number for {key} is not finite: {value!r}")
    return number


def map_axis(value: Optional[str]) -> List[float]:
    """Convert an OptiFine axis (half-turn fractions) to degrees"""
    if value is None:
        return list(DEFAULT_AXIS)
    tokens = value.split()
    if len(tokens) != 3:
        raise MappingError(f"axis needs 3 components: {value!r}")
    return [_parse_float("axis", token) * 180 for token in tokens]


def map_token_list(value: str) -> Union[str, List[str]]:
    """A single token stays a string; several become a list"""
    tokens = value.split()
    if len(tokens) == 1:
        return tokens[0]
    return tokens


def map_dimension(dimension: str) -> str:
    if dimension == PRIMARY_WORLD:
        return OVERWORLD
    return dimension


def map_properties(properties: Dict[str, str], dimension: str) -> Optional[Dict[str, Any]]:
    """
    Map every manifest field except the face textures.

    Args:
        properties: Parsed OptiFine properties
        dimension: World directory name (e.g. ``world0``)

    Returns:
        Manifest fields, or None if the layer has no directives

    Raises:
        MappingError: If a required property is missing or a value is invalid
    """
    if not has_directives(properties):
        return None

    fields: Dict[str, Any] = map_fade_window(properties)

    if "rotate" in properties:
        fields["shouldRotate"] = properties["rotate"].strip().lower() == "true"

    fields["axis"] = map_axis(properties.get("axis"))

    if "speed" in properties:
        fields["transitionSpeed"] = _parse_float("speed", properties["speed"])

    for key in ("weather", "biomes"):
        if key in properties and properties[key].split():
            fields[key] = map_token_list(properties[key])

    fields["dimensions"] = map_dimension(dimension)
    return fields


def assemble_manifest(fields: Dict[str, Any], faces: Dict[str, str]) -> SkyboxManifest:
    """Combine mapped fields with one texture reference per cube face"""
    missing = [face for face in FACES if face not in faces]
    if missing:
        raise MappingError(f"Missing face textures: {', '.join(missing)}")
    textures = {f"texture_{face}": faces[face] for face in FACES}
    return SkyboxManifest(**textures, **fields)


def build_manifest(properties: Dict[str, str], dimension: str,
                   faces: Dict[str, str]) -> Optional[SkyboxManifest]:
    """Build the complete manifest for one sky layer, or None if it has no directives"""
    fields = map_properties(properties, dimension)
    if fields is None:
        return None
    return assemble_manifest(fields, faces)
