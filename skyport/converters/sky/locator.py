"""
Discovery of OptiFine sky layers

Sky layers live at ``assets/<ns>/optifine/sky/<world>/<name>.properties``.
Only the overworld (``world0``) is converted for now; other worlds are
skipped without being reported.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterator

from skyport.exceptions import MappingError
from skyport.identifier import Identifier
from skyport.resources import ResourceAccessor, ResourceType

logger = logging.getLogger(__name__)

SKY_PARENT = "optifine/sky"
SKY_PATTERN = re.compile(r"optifine/sky/(?P<world>\w+)/(?P<name>\w+)\.properties$")
PROPERTIES_EXTENSION = ".properties"
PRIMARY_WORLD = "world0"


@dataclass(frozen=True)
class ConversionEntry:
    """One sky layer selected for conversion"""
    source_id: Identifier
    dimension: str
    name: str


def match_entry(identifier: Identifier, primary_world: str = PRIMARY_WORLD):
    """
    Match one candidate path.

    Returns:
        ConversionEntry, or None if the path is not a sky layer of the
        primary world
    """
    if not identifier.path.endswith(PROPERTIES_EXTENSION):
        return None

    match = SKY_PATTERN.search(identifier.path)
    if not match:
        logger.debug(f"Skipping {identifier}: not a sky layer")
        return None

    dimension = match.group("world")
    if dimension != primary_world:
        logger.debug(f"Skipping {identifier}: world {dimension} is not converted")
        return None

    return ConversionEntry(identifier, dimension, match.group("name"))


def locate_entries(accessor: ResourceAccessor, primary_world: str = PRIMARY_WORLD) -> Iterator[ConversionEntry]:
    """Yield a ConversionEntry for every primary-world sky layer in the pack"""
    for namespace in sorted(accessor.get_namespaces(ResourceType.ASSETS)):
        try:
            parent = Identifier(namespace, SKY_PARENT)
        except ValueError:
            logger.debug(f"Skipping invalid namespace: {namespace}")
            continue
        for identifier in accessor.search_in(ResourceType.ASSETS, parent):
            entry = match_entry(identifier, primary_world)
            if entry is not None:
                yield entry


def resolve_texture_id(entry: ConversionEntry, properties: Dict[str, str]) -> Identifier:
    """
    Find the atlas texture of a sky layer.

    ``source`` may be:
    - ``./file.png``: relative to the layer's own world directory
    - ``assets/<ns>/<path>``: a full pack path
    - ``<ns>/<path>``: a namespace followed by a path

    Without ``source`` the texture is ``<world>/<name>.png`` next to the layer.

    Raises:
        MappingError: If ``source`` names no namespace or an invalid path
    """
    namespace = entry.source_id.namespace
    source = properties.get("source")

    try:
        if source is None:
            return Identifier(namespace, f"{SKY_PARENT}/{entry.dimension}/{entry.name}.png")

        if source.startswith("./"):
            return Identifier(namespace, f"{SKY_PARENT}/{entry.dimension}/{source[2:]}")

        if source.startswith("assets/"):
            source = source[len("assets/"):]

        source_namespace, sep, path = source.partition("/")
        if not sep:
            raise MappingError(f"source has no namespace: {source!r}", entry.source_id)
        return Identifier(source_namespace, path)
    except ValueError as e:
        raise MappingError(f"Invalid source {source!r}: {e}", entry.source_id) from e
