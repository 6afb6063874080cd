"""
Recognized settings of the Jenkins proxy and their defaults.

Every key is read from the environment variable named after it with the
``JC`` prefix, e.g. ``postgres.host`` from ``JC_POSTGRES_HOST``.
"""

from datetime import timedelta

from ..core.registry import ConfigKey, KeyRegistry, KeyType
from ..core.validator import is_not_empty, is_url

ENV_PREFIX = "JC"

# Database
POSTGRES_HOST = "postgres.host"
POSTGRES_PORT = "postgres.port"
POSTGRES_DATABASE = "postgres.database"
POSTGRES_USER = "postgres.user"
POSTGRES_PASSWORD = "postgres.password"
POSTGRES_SSL_MODE = "postgres.ssl_mode"
POSTGRES_CONNECTION_TIMEOUT = "postgres.connection_timeout"
POSTGRES_CONNECTION_MAX_IDLE = "postgres.connection_max_idle"
POSTGRES_CONNECTION_MAX_OPEN = "postgres.connection_max_open"

# Upstream services
IDLER_API_URL = "idler.api_url"
AUTH_URL = "auth.url"
AUTH_TOKEN = "auth.token"
F8TENANT_API_URL = "f8tenant.api_url"
WIT_API_URL = "wit.api_url"

# Proxy
REDIRECT_URL = "redirect_url"
INDEX_PATH = "index_path"
MAX_REQUEST_RETRY = "max_request_retry"
DEBUG_MODE = "debug_mode"
ENABLE_HTTPS = "enable_https"
GATEWAY_TIMEOUT = "gateway_timeout"
ALLOWED_ORIGINS = "allowed_origins"

DEFAULT_POSTGRES_SSL_MODE = "disable"
DEFAULT_POSTGRES_CONNECTION_TIMEOUT = 5
DEFAULT_POSTGRES_CONNECTION_MAX_IDLE = -1
DEFAULT_POSTGRES_CONNECTION_MAX_OPEN = -1
DEFAULT_INDEX_PATH = "/opt/fabric8-jenkins-proxy/index.html"
DEFAULT_MAX_REQUEST_RETRY = 10
DEFAULT_DEBUG_MODE = False
DEFAULT_HTTPS_ENABLED = False
DEFAULT_GATEWAY_TIMEOUT = timedelta(seconds=5)
DEFAULT_ALLOWED_ORIGINS = ["https://*openshift.io", "https://localhost:*", "http://localhost:*"]


def get_proxy_keys() -> list:
    """Key definitions of the proxy, in display order."""
    return [
        ConfigKey(POSTGRES_HOST, KeyType.STRING, doc="Postgres host"),
        ConfigKey(POSTGRES_PORT, KeyType.INTEGER, doc="Postgres port"),
        ConfigKey(POSTGRES_DATABASE, KeyType.STRING, doc="Postgres database name"),
        ConfigKey(POSTGRES_USER, KeyType.STRING, doc="Postgres user"),
        ConfigKey(POSTGRES_PASSWORD, KeyType.STRING, doc="Postgres password"),
        ConfigKey(POSTGRES_SSL_MODE, KeyType.STRING, DEFAULT_POSTGRES_SSL_MODE,
                  doc="Postgres sslmode"),
        ConfigKey(POSTGRES_CONNECTION_TIMEOUT, KeyType.INTEGER, DEFAULT_POSTGRES_CONNECTION_TIMEOUT,
                  doc="Postgres connection timeout in seconds"),
        ConfigKey(POSTGRES_CONNECTION_MAX_IDLE, KeyType.INTEGER, DEFAULT_POSTGRES_CONNECTION_MAX_IDLE,
                  doc="Idle connections kept in the pool, -1 for no restriction"),
        ConfigKey(POSTGRES_CONNECTION_MAX_OPEN, KeyType.INTEGER, DEFAULT_POSTGRES_CONNECTION_MAX_OPEN,
                  doc="Open connections allowed in the pool, -1 for no restriction"),

        ConfigKey(IDLER_API_URL, KeyType.STRING, doc="Idler API URL"),
        ConfigKey(AUTH_URL, KeyType.STRING, rules=(is_url,), doc="Auth API URL"),
        ConfigKey(AUTH_TOKEN, KeyType.STRING, doc="Auth service account token"),
        ConfigKey(F8TENANT_API_URL, KeyType.STRING, doc="Tenant API URL"),
        ConfigKey(WIT_API_URL, KeyType.STRING, doc="Work item tracker API URL"),

        ConfigKey(REDIRECT_URL, KeyType.STRING, doc="Redirect URL passed to Auth"),
        ConfigKey(INDEX_PATH, KeyType.STRING, DEFAULT_INDEX_PATH, rules=(is_not_empty,),
                  doc="Path to the loading page template"),
        ConfigKey(MAX_REQUEST_RETRY, KeyType.INTEGER, DEFAULT_MAX_REQUEST_RETRY,
                  doc="Retries for webhook request forwarding"),
        ConfigKey(DEBUG_MODE, KeyType.BOOLEAN, DEFAULT_DEBUG_MODE, doc="Enable debug mode"),
        ConfigKey(ENABLE_HTTPS, KeyType.BOOLEAN, DEFAULT_HTTPS_ENABLED, doc="Enable https"),
        ConfigKey(GATEWAY_TIMEOUT, KeyType.DURATION, DEFAULT_GATEWAY_TIMEOUT,
                  doc="Time within which the reverse proxy expects a response"),
        ConfigKey(ALLOWED_ORIGINS, KeyType.STRING_LIST, tuple(DEFAULT_ALLOWED_ORIGINS),
                  doc="Allowed cross-origin list"),
    ]


def build_proxy_registry() -> KeyRegistry:
    """Fresh registry holding every proxy key."""
    return KeyRegistry(get_proxy_keys())
