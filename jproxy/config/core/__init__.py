"""
Core configuration management components.

This module provides the foundational components for layered configuration:
- KeyRegistry: Closed set of recognized keys with types, defaults and rules
- ConfigSource: Default, file and environment value sources
- Resolver: Precedence walk and type coercion
- ConfigValidator: Multi-error validation of resolved values
- render: Redacted string snapshot of resolved settings
"""

from .errors import (
    ConfigurationError, ConfigLoadError, ConfigValidationError, CoercionError, UnknownKeyError
)
from .registry import KeyType, ConfigKey, KeyRegistry
from .provider import ConfigSource, DefaultSource, MappingSource, FileConfigSource, EnvironmentSource
from .coercion import coerce
from .resolver import Resolver
from .validator import ConfigValidator, ValidationError, ValidationResult, is_not_empty, is_url
from .redactor import MASK, redact, render

__all__ = [
    # Errors
    'ConfigurationError',
    'ConfigLoadError',
    'ConfigValidationError',
    'CoercionError',
    'UnknownKeyError',

    # Registry
    'KeyType',
    'ConfigKey',
    'KeyRegistry',

    # Sources
    'ConfigSource',
    'DefaultSource',
    'MappingSource',
    'FileConfigSource',
    'EnvironmentSource',

    # Resolution
    'coerce',
    'Resolver',

    # Validators
    'ConfigValidator',
    'ValidationError',
    'ValidationResult',
    'is_not_empty',
    'is_url',

    # Redaction
    'MASK',
    'redact',
    'render'
]
