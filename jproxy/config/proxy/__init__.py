"""
Proxy configuration domain.

This module provides the proxy key table, its defaults and the typed
configuration object handed to the rest of the service.
"""

from .config import ProxyConfig, new_configuration
from .keys import ENV_PREFIX, build_proxy_registry, get_proxy_keys

__all__ = [
    'ProxyConfig',
    'new_configuration',
    'ENV_PREFIX',
    'build_proxy_registry',
    'get_proxy_keys'
]
