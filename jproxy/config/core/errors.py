"""
Configuration error taxonomy.

Every failure raised while building a configuration derives from
`ConfigurationError`, so callers can handle them uniformly.
"""

from typing import Any, List, Optional


class ConfigurationError(Exception):
    """Base class for all configuration errors."""


class ConfigLoadError(ConfigurationError):
    """Raised when the configuration file cannot be opened or parsed."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class ConfigValidationError(ConfigurationError):
    """Raised when one or more settings are missing or invalid."""

    def __init__(self, message: str, errors: Optional[List[Any]] = None):
        self.message = message
        self.errors = list(errors or [])
        super().__init__(message)


class CoercionError(ConfigurationError):
    """
    Raised when a raw value cannot be converted to its key's declared type.

    When `mask` is given it is shown in place of the raw value and `raw`
    is not kept, so secrets never reach messages or logs.
    """

    def __init__(self, key: str, raw: Any, expected: str, source: Optional[str] = None,
                 mask: Optional[str] = None):
        self.key = key
        self.raw = raw if mask is None else None
        self.expected = expected
        self.source = source
        shown = repr(raw) if mask is None else mask
        origin = f" (from {source})" if source else ""
        super().__init__(f"{key}: cannot convert {shown} to {expected}{origin}")


class UnknownKeyError(ConfigurationError, KeyError):
    """Raised when a key is not part of the registry."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown configuration key: {key}")

    def __str__(self):
        return self.args[0]
