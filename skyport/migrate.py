"""
Pack migration entry point

Runs one or more converters from an input pack into an output pack.
"""

import logging
from typing import Dict, Iterable, Optional

from skyport.converters import CONVERTERS, get_converter
from skyport.exceptions import FailureReport
from skyport.image import ImageProvider, PillowImageProvider
from skyport.resources import open_accessor

logger = logging.getLogger(__name__)


def migrate(
    input_path: str,
    output_path: str,
    converters: Optional[Iterable[str]] = None,
    image_provider: Optional[ImageProvider] = None
) -> Dict[str, FailureReport]:
    """
    Convert the legacy resources of a pack.

    Packs may be directories or ``.zip`` archives. Each converter's output is
    written once, when that converter finishes.

    Args:
        input_path: Input resource pack
        output_path: Output resource pack (created if missing)
        converters: Converter names to run (default: all)
        image_provider: Image codec (default: Pillow)

    Returns:
        Converter name -> failed resources

    Raises:
        FileNotFoundError: If the input pack doesn't exist
        ValueError: If a converter name is unknown

    Examples:
        >>> failed = migrate("old_pack.zip", "new_pack")
        >>> failed["Sky"]
        {}
    """
    names = list(converters) if converters else list(CONVERTERS)
    converter_classes = [get_converter(name) for name in names]
    image_provider = image_provider or PillowImageProvider()

    reports: Dict[str, FailureReport] = {}
    with open_accessor(input_path) as input_pack, open_accessor(output_path, writable=True) as output_pack:
        for converter_class in converter_classes:
            with converter_class(input_pack, output_pack) as converter:
                logger.info(f"Running {converter.name} converter")
                reports[converter.name] = converter.convert(image_provider)
    return reports
