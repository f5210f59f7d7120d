"""OptiFine custom sky -> FabricSkyboxes"""

from .converter import SkyConverter
from .locator import ConversionEntry, locate_entries, resolve_texture_id
from .mapper import build_manifest, map_fade_window, map_properties
from .slicer import FACE_REGIONS, slice_atlas

__all__ = [
    "SkyConverter",
    "ConversionEntry",
    "locate_entries",
    "resolve_texture_id",
    "build_manifest",
    "map_fade_window",
    "map_properties",
    "FACE_REGIONS",
    "slice_atlas",
]
