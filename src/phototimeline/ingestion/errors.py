"""Ingestion errors."""


class ScanError(Exception):
    """Raised when a root directory cannot be listed."""


class MetadataError(Exception):
    """Raised when a file's hash or capture date cannot be determined."""


class InsufficientMetadataError(MetadataError):
    """Raised when a readable file carries no usable capture date."""
