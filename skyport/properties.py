"""
Java .properties loader

OptiFine configuration files use the java.util.Properties text format. Keys and
values are returned in file order; a repeated key keeps its first position and
its last value, as Properties.load() does.
"""

import re
from typing import Dict, Iterator, List

from skyport.exceptions import PropertiesReadError

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_WHITESPACE = " \t\f"
# Only CR, LF and CRLF end a line; form feed is a separator
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def _logical_lines(text: str) -> Iterator[str]:
    """Join backslash-continued lines, dropping blanks and comments"""
    pending: List[str] = []
    for raw in _LINE_BREAK_RE.split(text):
        line = raw.lstrip(_WHITESPACE)
        if not pending and (not line or line[0] in "#!"):
            continue

        # An odd number of trailing backslashes continues the line
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending.append(line[:-1])
            continue

        pending.append(line)
        yield "".join(pending)
        pending = []

    if pending:
        yield "".join(pending)


def _unescape(value: str) -> str:
    out = []
    i = 0
    while i < len(value):
        char = value[i]
        if char != "\\":
            out.append(char)
            i += 1
            continue
        if i + 1 >= len(value):
            i += 1
            continue
        nxt = value[i + 1]
        if nxt == "u":
            digits = value[i + 2:i + 6]
            if len(digits) != 4:
                raise PropertiesReadError(f"Malformed \\uxxxx encoding: {value[i:i + 6]!r}")
            try:
                out.append(chr(int(digits, 16)))
            except ValueError:
                raise PropertiesReadError(f"Malformed \\uxxxx encoding: {value[i:i + 6]!r}") from None
            i += 6
        else:
            out.append(_ESCAPES.get(nxt, nxt))
            i += 2
    return "".join(out)


def _split_line(line: str):
    """Split one logical line into its raw key and raw value"""
    i = 0
    escaped = False
    while i < len(line):
        char = line[i]
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in "=:" or char in _WHITESPACE:
            break
        i += 1

    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    # At most one separator is consumed
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def load_properties(data: bytes) -> Dict[str, str]:
    """
    Parse .properties content.

    Args:
        data: Raw file bytes, decoded as ISO-8859-1

    Returns:
        Ordered mapping of keys to values

    Raises:
        PropertiesReadError: If an escape sequence is malformed
    """
    text = data.decode("latin-1")
    properties: Dict[str, str] = {}
    for line in _logical_lines(text):
        raw_key, raw_value = _split_line(line)
        properties[_unescape(raw_key)] = _unescape(raw_value)
    return properties
