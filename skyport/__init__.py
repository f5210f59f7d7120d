"""
SkyPort - Migrate OptiFine custom skies to FabricSkyboxes

Reads ``optifine/sky`` layers from a resource pack and writes FabricSkyboxes
manifests and face textures to a new pack.
"""

from skyport.converters import SkyConverter
from skyport.identifier import Identifier
from skyport.migrate import migrate

__version__ = "0.1.0"
__all__ = ["SkyConverter", "Identifier", "migrate"]
