"""
Custom sky converter

Converts OptiFine custom sky layers (``optifine/sky/world0/*.properties`` plus
their atlas textures) to FabricSkyboxes skyboxes (``fabricskyboxes:sky/*.json``
plus six face textures each).
"""

import logging

from skyport.converters.base import Converter
from skyport.converters.cache import OutputCache
from skyport.converters.sky.locator import (
    PRIMARY_WORLD,
    ConversionEntry,
    locate_entries,
    resolve_texture_id,
)
from skyport.converters.sky.mapper import assemble_manifest, map_properties
from skyport.converters.sky.slicer import (
    FABRICSKYBOXES_NAMESPACE,
    FABRICSKYBOXES_PARENT,
    slice_atlas,
)
from skyport.exceptions import (
    ConversionError,
    FailureReport,
    StreamUnavailableError,
)
from skyport.identifier import Identifier
from skyport.image import ImageProvider
from skyport.properties import load_properties
from skyport.resources import ResourceAccessor, ResourceType

logger = logging.getLogger(__name__)


class SkyConverter(Converter):
    """
    OptiFine custom sky -> FabricSkyboxes converter.

    Every artifact is buffered in an OutputCache and written when the
    converter is closed. A failing layer is recorded in the returned report
    and never stops the run.

    Example:
        >>> with SkyConverter(input_pack, output_pack) as converter:
        ...     failed = converter.convert(PillowImageProvider())
        >>> for identifier, error in failed.items():
        ...     print(identifier, error.value)
    """
    name = "Sky"

    def __init__(self, input: ResourceAccessor, output: ResourceAccessor,
                 namespace: str = FABRICSKYBOXES_NAMESPACE,
                 primary_world: str = PRIMARY_WORLD):
        super().__init__(input, output)
        self.namespace = namespace
        self.primary_world = primary_world
        self.cache = OutputCache()

    def convert(self, image_provider: ImageProvider) -> FailureReport:
        failed: FailureReport = {}
        converted = 0

        for entry in locate_entries(self.input, self.primary_world):
            try:
                if self.convert_entry(entry, image_provider):
                    converted += 1
            except ConversionError as e:
                identifier = e.identifier or entry.source_id
                logger.warning(f"Failed to convert {identifier}: {e}")
                failed[identifier] = e.error_type

        logger.info(f"Converted {converted} sky layers ({len(failed)} failed)")
        return failed

    def manifest_identifier(self, entry: ConversionEntry) -> Identifier:
        return Identifier(self.namespace, f"{FABRICSKYBOXES_PARENT}/{entry.name}.json")

    def _read(self, identifier: Identifier) -> bytes:
        data = self.input.get_bytes(ResourceType.ASSETS, identifier)
        if data is None:
            raise StreamUnavailableError(f"Resource not found: {identifier}", identifier)
        return data

    def convert_entry(self, entry: ConversionEntry, image_provider: ImageProvider) -> bool:
        """
        Convert one sky layer into the cache.

        Returns:
            True if a manifest was produced, False if the layer was dropped

        Raises:
            ConversionError: If the layer cannot be converted
        """
        try:
            properties = load_properties(self._read(entry.source_id))
        except ConversionError as e:
            e.identifier = e.identifier or entry.source_id
            raise

        fields = map_properties(properties, entry.dimension)
        if fields is None:
            logger.debug(f"Skipping {entry.source_id}: no sky directives")
            return False

        texture_id = resolve_texture_id(entry, properties)
        try:
            image = image_provider.read_image(self._read(texture_id))
        except ConversionError as e:
            e.identifier = e.identifier or texture_id
            raise

        try:
            faces = slice_atlas(image, texture_id.stem, self.cache, image_provider, self.namespace)
        finally:
            image.close()

        manifest = assemble_manifest(fields, faces)
        self.cache.put_if_absent(self.manifest_identifier(entry), manifest.to_json().encode("utf-8"))
        logger.debug(f"Converted {entry.source_id} using texture {texture_id}")
        return True

    def close(self) -> None:
        self.cache.flush(self.output, ResourceType.ASSETS)
