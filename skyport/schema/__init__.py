"""Output schema definitions."""
from .skybox import FACES, SkyboxManifest

__all__ = [
    "FACES",
    "SkyboxManifest",
]
