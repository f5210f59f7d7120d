"""
Image decoding and encoding

Thin Pillow wrapper so converters can be handed a different provider (for
example one that caches decoded textures) without changing their code.
"""

from abc import ABC, abstractmethod
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from skyport.exceptions import ImageDecodeError


class ImageProvider(ABC):
    """Decodes texture bytes and encodes images back to PNG"""

    @abstractmethod
    def read_image(self, data: bytes) -> Image.Image:
        """Decode image bytes, raising ImageDecodeError on failure"""

    @abstractmethod
    def encode_png(self, image: Image.Image) -> bytes:
        """Encode an image as PNG"""


class PillowImageProvider(ImageProvider):
    """Default provider backed by Pillow"""

    def read_image(self, data: bytes) -> Image.Image:
        """
        Decode image bytes.

        Raises:
            ImageDecodeError: If Pillow cannot identify or load the data, or
                              the declared size exceeds Pillow's pixel limit
        """
        try:
            image = Image.open(BytesIO(data))
            # Force decoding now so truncated files fail here, not at crop time
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError,
                OSError, SyntaxError, ValueError) as e:
            raise ImageDecodeError(f"Cannot decode image: {e}") from e
        return image

    def encode_png(self, image: Image.Image) -> bytes:
        buffer = BytesIO()
        image.save(buffer, format='PNG')
        return buffer.getvalue()
