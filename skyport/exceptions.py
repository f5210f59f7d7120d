"""Custom exceptions and failure reporting for conversions"""

from enum import Enum
from typing import Dict, Optional

from skyport.identifier import Identifier


class ErrorType(str, Enum):
    """Why a single source resource could not be converted"""
    INPUTSTREAM_IO = "inputstream_io"
    PROPERTIES_READ = "properties_read"
    IMAGE_DECODE = "image_decode"
    MAPPING = "mapping"


# Failures collected over one converter run, keyed by the offending resource
FailureReport = Dict[Identifier, ErrorType]


class ConversionError(Exception):
    """Base exception for entry-level conversion errors"""
    error_type: ErrorType = ErrorType.MAPPING

    def __init__(self, message: str, identifier: Optional[Identifier] = None):
        super().__init__(message)
        self.identifier = identifier


class StreamUnavailableError(ConversionError):
    """A referenced resource does not exist in the input pack"""
    error_type = ErrorType.INPUTSTREAM_IO


class PropertiesReadError(ConversionError):
    """Malformed .properties text"""
    error_type = ErrorType.PROPERTIES_READ


class ImageDecodeError(ConversionError):
    """Texture bytes could not be decoded as an image"""
    error_type = ErrorType.IMAGE_DECODE


class MappingError(ConversionError):
    """Missing mandatory property or a value that cannot be mapped"""
    error_type = ErrorType.MAPPING
