"""Organize photo collections into a date-partitioned timeline."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("photo-timeline")
except PackageNotFoundError:  # source checkout without an install
    __version__ = "0.0.0"

__all__ = ["__version__"]
