"""IO utilities: format descriptions, polar reader, metadata, config loader."""

from .formats import PolarFileFormat, LibraryFormat, QBLADE_PLR, AD15_LIBRARY
from .extracted import ExtractedValue
from .polar_reader import DelimiterKind, PolarFileParser, detect_delimiter, read_lines
from .metadata import MetadataExtractor, reynolds_from_filename
from .job import ConversionJob
from .config_loader import ConfigLoader

__all__ = [
    "PolarFileFormat",
    "LibraryFormat",
    "QBLADE_PLR",
    "AD15_LIBRARY",
    "ExtractedValue",
    "DelimiterKind",
    "PolarFileParser",
    "detect_delimiter",
    "read_lines",
    "MetadataExtractor",
    "reynolds_from_filename",
    "ConversionJob",
    "ConfigLoader",
]
