"""Discovery and metadata extraction for photo collections."""

from .detectors import HashComputer
from .discovery import DirectoryScanner
from .errors import InsufficientMetadataError, MetadataError, ScanError
from .extractors import CaptureDateReader, MetadataExtractor
from .loader import DirectoryLoader, ProgressCallback
from .models import ExtractedMetadata, LoadResult

__all__ = [
    "CaptureDateReader",
    "DirectoryLoader",
    "DirectoryScanner",
    "ExtractedMetadata",
    "HashComputer",
    "InsufficientMetadataError",
    "LoadResult",
    "MetadataError",
    "MetadataExtractor",
    "ProgressCallback",
    "ScanError",
]
