"""Resource pack converters"""

from typing import Dict, Type

from skyport.converters.base import Converter
from skyport.converters.cache import OutputCache
from skyport.converters.sky import SkyConverter

CONVERTERS: Dict[str, Type[Converter]] = {
    "sky": SkyConverter,
}


def get_converter(name: str) -> Type[Converter]:
    """Look up a converter class by its command-line name"""
    try:
        return CONVERTERS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown converter: {name}. "
            f"Supported: {', '.join(sorted(CONVERTERS))}"
        ) from None


__all__ = [
    "CONVERTERS",
    "Converter",
    "OutputCache",
    "SkyConverter",
    "get_converter",
]
