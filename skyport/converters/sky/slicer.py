"""
Cubemap atlas slicing

OptiFine sky textures are 3x2 atlases of square faces, ``scale = height / 2``
pixels on a side:

    +--------+--------+--------+
    | bottom |  top   |  west  |
    +--------+--------+--------+
    | north  |  east  | south  |
    +--------+--------+--------+

Each face is cut out and stored as its own FabricSkyboxes texture. The layout
is a fixed contract with existing packs. Atlases that are too narrow are not
rejected; Pillow fills the missing area of a face with transparent pixels.
"""

import logging
from typing import Dict, Tuple

from PIL import Image

from skyport.converters.cache import OutputCache
from skyport.identifier import Identifier
from skyport.image import ImageProvider

logger = logging.getLogger(__name__)

FABRICSKYBOXES_NAMESPACE = "fabricskyboxes"
FABRICSKYBOXES_PARENT = "sky"

# (left, top) of each face, in units of the face size
FACE_REGIONS: Dict[str, Tuple[int, int]] = {
    "top": (1, 0),
    "bottom": (0, 0),
    "north": (0, 1),
    "south": (2, 1),
    "east": (1, 1),
    "west": (2, 0),
}


def face_region(face: str, scale: int) -> Tuple[int, int, int, int]:
    """Pillow crop box ``(left, upper, right, lower)`` of a face"""
    col, row = FACE_REGIONS[face]
    left, upper = col * scale, row * scale
    return left, upper, left + scale, upper + scale


def face_identifier(texture_name: str, face: str,
                    namespace: str = FABRICSKYBOXES_NAMESPACE) -> Identifier:
    return Identifier(namespace, f"{FABRICSKYBOXES_PARENT}/{texture_name}_{face}.png")


def slice_atlas(image: Image.Image, texture_name: str, cache: OutputCache,
                image_provider: ImageProvider,
                namespace: str = FABRICSKYBOXES_NAMESPACE) -> Dict[str, str]:
    """
    Split an atlas into six face textures and cache them.

    Faces already cached under the same texture name are neither re-encoded
    nor replaced.

    Args:
        image: Decoded atlas
        texture_name: Atlas file stem, used to name the face textures
        cache: Output cache receiving the encoded faces
        image_provider: Encoder for the face images
        namespace: Output namespace

    Returns:
        Face name -> face texture identifier string
    """
    scale = image.height // 2
    faces = {}
    for face in FACE_REGIONS:
        identifier = face_identifier(texture_name, face, namespace)
        if identifier not in cache:
            face_image = image.crop(face_region(face, scale))
            cache.put_if_absent(identifier, image_provider.encode_png(face_image))
        else:
            logger.debug(f"Reusing cached face texture {identifier}")
        faces[face] = str(identifier)
    return faces
