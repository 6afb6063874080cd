"""
Layered configuration for the Jenkins proxy.

Settings come from three sources, in increasing precedence:
- compiled-in defaults
- an optional YAML file
- process environment variables (``JC_`` prefix)
"""

# Core infrastructure
from .core import (
    ConfigurationError, ConfigLoadError, ConfigValidationError, CoercionError, UnknownKeyError,
    KeyType, ConfigKey, KeyRegistry,
    ConfigSource, DefaultSource, MappingSource, FileConfigSource, EnvironmentSource,
    Resolver, ConfigValidator, ValidationError, ValidationResult, is_not_empty, is_url,
    render
)

# Proxy domain
from .proxy import ProxyConfig, new_configuration, build_proxy_registry

__all__ = [
    # Errors
    'ConfigurationError',
    'ConfigLoadError',
    'ConfigValidationError',
    'CoercionError',
    'UnknownKeyError',

    # Core infrastructure
    'KeyType',
    'ConfigKey',
    'KeyRegistry',
    'ConfigSource',
    'DefaultSource',
    'MappingSource',
    'FileConfigSource',
    'EnvironmentSource',
    'Resolver',
    'ConfigValidator',
    'ValidationError',
    'ValidationResult',
    'is_not_empty',
    'is_url',
    'render',

    # Proxy domain
    'ProxyConfig',
    'new_configuration',
    'build_proxy_registry'
]
