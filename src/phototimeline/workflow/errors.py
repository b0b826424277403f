"""Workflow errors."""


class ConfigurationError(Exception):
    """Raised when the input or output roots cannot be used for a run."""
