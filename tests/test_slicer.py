"""
Tests for cubemap atlas slicing
"""
from io import BytesIO

import numpy as np
import pytest
from PIL import Image

from conftest import FACE_COLORS, make_atlas
from skyport.converters.cache import OutputCache
from skyport.converters.sky.slicer import FACE_REGIONS, face_identifier, face_region, slice_atlas
from skyport.identifier import Identifier
from skyport.image import PillowImageProvider


class CountingProvider(PillowImageProvider):
    """Counts PNG encodes"""

    def __init__(self):
        self.encoded = 0

    def encode_png(self, image):
        self.encoded += 1
        return super().encode_png(image)


def decode(data: bytes) -> Image.Image:
    return Image.open(BytesIO(data))


class TestFaceRegions:
    """Test the fixed atlas geometry"""

    def test_top_region(self):
        """On a 64px high atlas, top is the cell at (32, 0)"""
        assert face_region("top", 32) == (32, 0, 64, 32)

    def test_south_region(self):
        assert face_region("south", 32) == (64, 32, 96, 64)

    def test_all_faces_covered(self):
        assert set(FACE_REGIONS) == {"top", "bottom", "north", "south", "east", "west"}

    def test_face_identifier(self):
        assert face_identifier("sky1", "top") == Identifier("fabricskyboxes", "sky/sky1_top.png")


class TestSliceAtlas:
    """Test slicing into the output cache"""

    def test_faces_extracted(self):
        """Each face texture holds exactly the pixels of its atlas cell"""
        cache = OutputCache()
        faces = slice_atlas(make_atlas(32), "sky1", cache, PillowImageProvider())

        assert len(cache) == 6
        for face, reference in faces.items():
            image = decode(cache.get(Identifier.parse(reference))).convert('RGBA')
            assert image.size == (32, 32)
            pixels = np.array(image)
            assert (pixels == np.array(FACE_COLORS[face], dtype=np.uint8)).all(), face

    def test_returns_references(self):
        faces = slice_atlas(make_atlas(16), "night", OutputCache(), PillowImageProvider())
        assert faces["east"] == "fabricskyboxes:sky/night_east.png"

    def test_repeated_slice_not_reencoded(self):
        """Slicing the same texture name twice encodes each face once"""
        cache = OutputCache()
        provider = CountingProvider()

        first = slice_atlas(make_atlas(16), "sky1", cache, provider)
        stored = dict(cache)
        second = slice_atlas(make_atlas(16), "sky1", cache, provider)

        assert provider.encoded == 6
        assert first == second
        assert dict(cache) == stored

    def test_first_atlas_wins(self):
        """A later atlas with the same texture name does not overwrite faces"""
        cache = OutputCache()
        provider = PillowImageProvider()
        slice_atlas(make_atlas(16), "sky1", cache, provider)
        slice_atlas(Image.new('RGBA', (48, 32), (0, 0, 0, 255)), "sky1", cache, provider)

        top = np.array(decode(cache.get(face_identifier("sky1", "top"))).convert('RGBA'))
        assert (top == np.array(FACE_COLORS["top"], dtype=np.uint8)).all()

    def test_narrow_atlas_not_rejected(self):
        """Out-of-bounds cells are not an error"""
        cache = OutputCache()
        slice_atlas(Image.new('RGBA', (64, 64), (10, 20, 30, 255)), "narrow", cache, PillowImageProvider())

        south = decode(cache.get(face_identifier("narrow", "south")))
        assert south.size == (32, 32)


class TestImageProvider:
    """Test the image provider interface"""

    def test_provider_is_abstract(self):
        from skyport.image import ImageProvider

        with pytest.raises(TypeError):
            ImageProvider()

    def test_oversized_image_rejected(self):
        """A header declaring more pixels than Pillow allows is a decode error"""
        from conftest import png_header_only
        from skyport.exceptions import ImageDecodeError

        with pytest.raises(ImageDecodeError):
            PillowImageProvider().read_image(png_header_only(30000, 30000))
