"""
Configuration validation framework.

This module provides the multi-error collector, the standard validation
rules and the validator that runs them over every registered key.
"""

from typing import Any, List, Optional
from urllib.parse import urlparse

from .errors import CoercionError, ConfigValidationError
from .registry import KeyRegistry
from .resolver import Resolver
from jproxy.logger import get_jproxy_logger


class ValidationError(Exception):
    """A single failed check on a configuration value."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value
        super().__init__(message)


class ValidationResult:
    """
    Collector of validation errors.

    Errors are accumulated in the order they are reported; collecting never
    stops a validation pass.
    """

    def __init__(self, errors: Optional[List[ValidationError]] = None):
        self.errors: List[ValidationError] = list(errors or [])

    def add_error(self, error: ValidationError):
        """Add a validation error."""
        self.errors.append(error)

    def collect(self, error: Optional[ValidationError]):
        """Add `error` unless it is None, so rule results can be passed straight in."""
        if error is not None:
            self.add_error(error)

    def extend(self, other: "ValidationResult"):
        self.errors.extend(other.errors)

    @property
    def is_empty(self) -> bool:
        return not self.errors

    @property
    def is_valid(self) -> bool:
        return self.is_empty

    @property
    def messages(self) -> List[str]:
        return [error.message for error in self.errors]

    def to_error(self) -> Optional[ConfigValidationError]:
        """Combine every collected error into one, or None when there are none."""
        if self.is_empty:
            return None
        return ConfigValidationError("; ".join(self.messages), errors=self.errors)

    def __bool__(self):
        return self.is_valid

    def __len__(self):
        return len(self.errors)


def is_not_empty(key: str, value: Any) -> Optional[ValidationError]:
    """Fail when the value is the empty string."""
    if value is None or (isinstance(value, str) and value == ""):
        return ValidationError(f"{key} must not be empty", field=key, value=value)
    return None


def is_url(key: str, value: Any) -> Optional[ValidationError]:
    """Fail unless the value is an absolute URL with a scheme and a host."""
    if not isinstance(value, str) or not value:
        return ValidationError(f"{key} must be a valid URL, got an empty value", field=key, value=value)

    try:
        parsed = urlparse(value)
        hostname = parsed.hostname
    except ValueError:
        hostname = None
    if not hostname or not parsed.scheme or any(c.isspace() for c in value):
        return ValidationError(f"{key} must be a valid URL, got '{value}'", field=key, value=value)
    return None


class ConfigValidator:
    """
    Runs the rules of every registered key against the resolved values.

    Each key is resolved first: a value that cannot be coerced to its
    declared type is reported as a failure of that key, and its rules are
    skipped. Keys without rules are only checked for coercion.
    """

    def __init__(self, registry: KeyRegistry):
        self.registry = registry
        self.logger = get_jproxy_logger().bind(component="ConfigValidator")

    def validate(self, resolver: Resolver) -> ValidationResult:
        """Validate all keys; the result is empty if and only if every key passed."""
        result = ValidationResult()

        for key in self.registry:
            try:
                value = resolver.resolve(key.name)
            except CoercionError as e:
                result.add_error(ValidationError(str(e), field=key.name, value=e.raw))
                continue

            for rule in key.rules:
                try:
                    result.collect(rule(key.name, value))
                except Exception as e:
                    result.add_error(ValidationError(
                        f"{key.name}: rule {rule.__name__} raised exception: {str(e)}",
                        field=key.name
                    ))

        self.logger.debug("Validation pass finished", keys=len(self.registry), errors=len(result))
        return result
