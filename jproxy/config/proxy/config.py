"""
Resolved configuration of the Jenkins proxy.

`new_configuration` builds the key registry and the value sources, runs a
single validation pass and returns an immutable `ProxyConfig`. Accessors
resolve through the sources on every call, so environment changes made
after construction are observed.
"""

from datetime import timedelta
from typing import Any, Dict, List, Mapping, Optional

from ..core.errors import CoercionError, ConfigLoadError, ConfigValidationError
from ..core.provider import ConfigSource, DefaultSource, EnvironmentSource, FileConfigSource
from ..core.redactor import render
from ..core.registry import KeyRegistry
from ..core.resolver import Resolver
from ..core.validator import ConfigValidator
from . import keys
from jproxy.logger import get_jproxy_logger


class ProxyConfig:
    """
    Immutable, typed view over the resolved proxy settings.

    Reading never fails: when a live environment value stops being
    coercible after construction, the key's zero value is returned and a
    warning is logged.
    """

    __slots__ = ("_registry", "_resolver", "_logger")

    def __init__(self, registry: KeyRegistry, resolver: Resolver):
        object.__setattr__(self, "_registry", registry)
        object.__setattr__(self, "_resolver", resolver)
        object.__setattr__(self, "_logger", get_jproxy_logger().bind(component="ProxyConfig"))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is read-only")

    @property
    def registry(self) -> KeyRegistry:
        return self._registry

    def get(self, name: str) -> Any:
        """
        Typed value of any registered key.

        Raises:
            UnknownKeyError: If the key is not registered
        """
        try:
            return self._resolver.resolve(name)
        except CoercionError as e:
            self._logger.warning("Ignoring malformed configuration value",
                                 key=e.key, source=e.source, expected=e.expected)
            return self._registry.get(name).zero_value()

    def settings(self) -> Dict[str, Any]:
        """Typed values of every registered key."""
        return {key.name: self.get(key.name) for key in self._registry}

    # Database

    @property
    def postgres_host(self) -> str:
        return self.get(keys.POSTGRES_HOST)

    @property
    def postgres_port(self) -> int:
        return self.get(keys.POSTGRES_PORT)

    @property
    def postgres_user(self) -> str:
        return self.get(keys.POSTGRES_USER)

    @property
    def postgres_database(self) -> str:
        return self.get(keys.POSTGRES_DATABASE)

    @property
    def postgres_password(self) -> str:
        return self.get(keys.POSTGRES_PASSWORD)

    @property
    def postgres_ssl_mode(self) -> str:
        return self.get(keys.POSTGRES_SSL_MODE)

    @property
    def postgres_connection_timeout(self) -> int:
        """Connection timeout in seconds."""
        return self.get(keys.POSTGRES_CONNECTION_TIMEOUT)

    @property
    def postgres_connection_max_idle(self) -> int:
        """
        Number of connections kept alive in the pool at any given time.
        -1 means no restriction.
        """
        return self.get(keys.POSTGRES_CONNECTION_MAX_IDLE)

    @property
    def postgres_connection_max_open(self) -> int:
        """Maximum number of open connections in the pool. -1 means no restriction."""
        return self.get(keys.POSTGRES_CONNECTION_MAX_OPEN)

    # Upstream services

    @property
    def idler_url(self) -> str:
        return self.get(keys.IDLER_API_URL)

    @property
    def auth_url(self) -> str:
        return self.get(keys.AUTH_URL)

    @property
    def tenant_url(self) -> str:
        return self.get(keys.F8TENANT_API_URL)

    @property
    def wit_url(self) -> str:
        return self.get(keys.WIT_API_URL)

    @property
    def auth_token(self) -> str:
        return self.get(keys.AUTH_TOKEN)

    # Proxy

    @property
    def redirect_url(self) -> str:
        """Redirect URL passed to Auth."""
        return self.get(keys.REDIRECT_URL)

    @property
    def index_path(self) -> str:
        """Path to the loading page template."""
        return self.get(keys.INDEX_PATH)

    @property
    def max_request_retry(self) -> int:
        """Number of retries for webhook request forwarding."""
        return self.get(keys.MAX_REQUEST_RETRY)

    @property
    def debug_mode(self) -> bool:
        return self.get(keys.DEBUG_MODE)

    @property
    def https_enabled(self) -> bool:
        return self.get(keys.ENABLE_HTTPS)

    @property
    def gateway_timeout(self) -> timedelta:
        """Duration within which the reverse proxy expects a response."""
        return self.get(keys.GATEWAY_TIMEOUT)

    @property
    def allowed_origins(self) -> List[str]:
        """Allowed cross-origin list, split from the current raw value on every call."""
        return self.get(keys.ALLOWED_ORIGINS)

    def __str__(self):
        return render(self.settings())

    def __repr__(self):
        return f"ProxyConfig(sources={self._resolver.source_names()})"


def new_configuration(config_file_path: Optional[str] = None,
                      environ: Optional[Mapping[str, str]] = None,
                      prefix: str = keys.ENV_PREFIX) -> ProxyConfig:
    """
    Build the proxy configuration.

    Args:
        config_file_path: Optional path to a YAML file; empty or None disables
            the file source
        environ: Environment mapping to read from, defaults to ``os.environ``
        prefix: Environment variable prefix

    Returns:
        The validated configuration

    Raises:
        ConfigLoadError: If the file cannot be opened or parsed
        ConfigValidationError: If any setting is missing or invalid; carries
            every collected error
    """
    logger = get_jproxy_logger().bind(component="configuration")
    registry = keys.build_proxy_registry()

    sources: List[ConfigSource] = [EnvironmentSource(registry, prefix=prefix, environ=environ)]
    if config_file_path:
        try:
            sources.append(FileConfigSource(config_file_path))
        except ConfigLoadError as e:
            logger.error("Failed to load config file", path=config_file_path, error=str(e))
            raise
    sources.append(DefaultSource(registry))

    resolver = Resolver(registry, sources)
    result = ConfigValidator(registry).validate(resolver)
    if not result.is_empty:
        for error in result.errors:
            logger.error(error.message, key=error.field)
        combined = result.to_error()
        raise ConfigValidationError(
            f"some config variables are missing or invalid: {combined}",
            errors=result.errors
        ) from combined

    logger.info("Configuration loaded", sources=resolver.source_names())
    return ProxyConfig(registry, resolver)
