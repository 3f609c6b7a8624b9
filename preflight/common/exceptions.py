"""
Exceptions raised by the preflight engine.

Bad catalog data never raises: it is reported as an Issue. Exceptions are
reserved for problems in the rule-set configuration or in how the engine is
called.
"""


class PreflightError(Exception):
    """Base class for all preflight errors."""


class ConfigurationError(PreflightError):
    """A format profile or its metadata is missing or inconsistent."""

    def __init__(self, message: str, format_id: str | None = None):
        super().__init__(message)
        self.format_id = format_id
