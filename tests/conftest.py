"""
Shared fixtures: synthetic sky atlases and in-memory packs
"""
import struct
import zlib
from io import BytesIO

import pytest
from PIL import Image

from skyport.identifier import Identifier
from skyport.resources import MemoryResourceAccessor, ResourceType

# One solid colour per atlas cell, keyed by the face stored there
FACE_COLORS = {
    "bottom": (255, 0, 0, 255),
    "top": (0, 255, 0, 255),
    "west": (0, 0, 255, 255),
    "north": (255, 255, 0, 255),
    "east": (0, 255, 255, 255),
    "south": (255, 0, 255, 255),
}

ATLAS_LAYOUT = [
    ["bottom", "top", "west"],
    ["north", "east", "south"],
]

SKY_PROPERTIES = """\
# Night sky
startFadeIn=17:00
endFadeIn=18:00
endFadeOut=06:00
blend=add
rotate=true
speed=1.5
axis=0.0 0.0 1.0
weather=clear
biomes=plains forest
"""


def make_atlas(scale: int = 32) -> Image.Image:
    """Build a 3x2 sky atlas with one solid colour per face"""
    atlas = Image.new('RGBA', (scale * 3, scale * 2))
    for row, faces in enumerate(ATLAS_LAYOUT):
        for col, face in enumerate(faces):
            cell = Image.new('RGBA', (scale, scale), FACE_COLORS[face])
            atlas.paste(cell, (col * scale, row * scale))
    return atlas


def png_bytes(image: Image.Image) -> bytes:
    buffer = BytesIO()
    image.save(buffer, format='PNG')
    return buffer.getvalue()


@pytest.fixture
def atlas():
    return make_atlas()


@pytest.fixture
def sky_pack():
    """Input pack with one overworld sky layer and its atlas"""
    return MemoryResourceAccessor({
        (ResourceType.ASSETS, Identifier("minecraft", "optifine/sky/world0/sky1.properties")):
            SKY_PROPERTIES.encode("latin-1"),
        (ResourceType.ASSETS, Identifier("minecraft", "optifine/sky/world0/sky1.png")):
            png_bytes(make_atlas()),
    })


def png_header_only(width: int, height: int) -> bytes:
    """A PNG holding only a signature and an IHDR chunk for the given size"""
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    chunk = b"IHDR" + ihdr
    return (
        b"\x89PNG\r\n\x1a\n"
        + struct.pack(">I", len(ihdr))
        + chunk
        + struct.pack(">I", zlib.crc32(chunk) & 0xFFFFFFFF)
    )
