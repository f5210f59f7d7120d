"""Common lifecycle of all pack converters"""

from abc import ABC, abstractmethod

from skyport.exceptions import FailureReport
from skyport.image import ImageProvider
from skyport.resources import ResourceAccessor


class Converter(ABC):
    """
    Converts one kind of legacy resource from ``input`` into ``output``.

    ``convert()`` may buffer its artifacts; they are guaranteed to reach the
    output only after ``close()``. Use the converter as a context manager:

        >>> with SkyConverter(input_pack, output_pack) as converter:
        ...     failed = converter.convert(PillowImageProvider())
    """
    name: str = ""

    def __init__(self, input: ResourceAccessor, output: ResourceAccessor):
        self.input = input
        self.output = output

    @abstractmethod
    def convert(self, image_provider: ImageProvider) -> FailureReport:
        """Run the conversion and return the resources that failed"""

    def close(self) -> None:
        """Write any buffered output"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
