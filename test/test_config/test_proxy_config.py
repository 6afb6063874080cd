import threading
from datetime import timedelta

import pytest
from structlog.testing import capture_logs

from jproxy.config import (
    ConfigLoadError, ConfigValidationError, ConfigurationError, ProxyConfig, new_configuration
)
from jproxy.config.proxy import keys


class TestNewConfiguration:

    def test_nonexistent_file_fails(self, valid_env):
        with pytest.raises(ConfigLoadError):
            new_configuration("fileNot.yaml")

    def test_empty_path_disables_file_source(self, valid_env):
        config = new_configuration("")
        assert isinstance(config, ProxyConfig)
        assert repr(config) == "ProxyConfig(sources=['environment', 'default'])"

    def test_validation_failure_reports_every_error(self, clean_env):
        clean_env.setenv("JC_AUTH_URL", "not a url")
        clean_env.setenv("JC_INDEX_PATH", "")
        clean_env.setenv("JC_POSTGRES_PORT", "abc")

        with pytest.raises(ConfigValidationError) as exc_info:
            new_configuration()

        error = exc_info.value
        assert isinstance(error, ConfigurationError)
        assert str(error).startswith("some config variables are missing or invalid")
        assert [e.field for e in error.errors] == [keys.POSTGRES_PORT, keys.AUTH_URL, keys.INDEX_PATH]

    def test_missing_auth_url_fails(self):
        with pytest.raises(ConfigValidationError):
            new_configuration()

    def test_index_path_accepts_value(self, valid_env):
        valid_env.setenv("JC_INDEX_PATH", "indexPath")
        assert new_configuration().index_path == "indexPath"

    def test_file_values(self, valid_env, yaml_file):
        path = yaml_file("""
            postgres:
              host: file-host
              port: 5433
            max_request_retry: 2
            gateway_timeout: 1m
            enable_https: true
        """)
        config = new_configuration(path)

        assert config.postgres_host == "file-host"
        assert config.postgres_port == 5433
        assert config.max_request_retry == 2
        assert config.gateway_timeout == timedelta(minutes=1)
        assert config.https_enabled is True

    def test_environment_overrides_file(self, valid_env, yaml_file):
        path = yaml_file("postgres:\n  host: file-host\n")
        valid_env.setenv("JC_POSTGRES_HOST", "localhost:9001")

        assert new_configuration(path).postgres_host == "localhost:9001"

    def test_malformed_file_value_fails_construction(self, valid_env, yaml_file):
        path = yaml_file("gateway_timeout: soon\n")

        with pytest.raises(ConfigValidationError) as exc_info:
            new_configuration(path)
        assert [e.field for e in exc_info.value.errors] == [keys.GATEWAY_TIMEOUT]

    def test_injected_environment(self):
        config = new_configuration(environ={"JC_AUTH_URL": "https://auth.example.io",
                                            "JC_POSTGRES_USER": "f8proxy"})
        assert config.postgres_user == "f8proxy"

    def test_file_that_is_not_utf8_fails(self, valid_env, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_bytes(b"postgres:\n  host: \xff\xfe\n")

        with pytest.raises(ConfigLoadError):
            new_configuration(str(path))

    def test_malformed_secret_is_never_reported(self, valid_env, yaml_file):
        path = yaml_file("postgres:\n  password: [s3cr3t-pw]\n")

        with capture_logs() as logs:
            with pytest.raises(ConfigValidationError) as exc_info:
                new_configuration(path)

        error = exc_info.value
        assert [e.field for e in error.errors] == [keys.POSTGRES_PASSWORD]
        assert "s3cr3t-pw" not in str(error)
        assert "s3cr3t-pw" not in str(error.__cause__)
        assert all(e.value is None for e in error.errors)
        assert any(entry["log_level"] == "error" for entry in logs)
        assert "s3cr3t-pw" not in repr(logs)

    def test_yaml_dates_are_read_as_text(self, valid_env, yaml_file):
        path = yaml_file("""
            postgres:
              database: 2024-01-01
              password: 2023-12-31
        """)
        config = new_configuration(path)

        assert config.postgres_database == "2024-01-01"
        assert config.postgres_password == "2023-12-31"


class TestAccessors:
    """Each accessor returns its environment value or its default."""

    @pytest.mark.parametrize("env_var,value,accessor,expected", [
        ("JC_POSTGRES_HOST", "localhost:9001", "postgres_host", "localhost:9001"),
        ("JC_POSTGRES_PORT", "999", "postgres_port", 999),
        ("JC_POSTGRES_USER", "f8proxy", "postgres_user", "f8proxy"),
        ("JC_POSTGRES_DATABASE", "f8proxyDB", "postgres_database", "f8proxyDB"),
        ("JC_POSTGRES_PASSWORD", "f8proxyPass", "postgres_password", "f8proxyPass"),
        ("JC_POSTGRES_SSL_MODE", "enable", "postgres_ssl_mode", "enable"),
        ("JC_IDLER_API_URL", "idler.openshift.io", "idler_url", "idler.openshift.io"),
        ("JC_AUTH_URL", "https://auth.openshift.io", "auth_url", "https://auth.openshift.io"),
        ("JC_F8TENANT_API_URL", "tenant.openshift.io", "tenant_url", "tenant.openshift.io"),
        ("JC_WIT_API_URL", "wit.openshift.io", "wit_url", "wit.openshift.io"),
        ("JC_AUTH_TOKEN", "secret", "auth_token", "secret"),
        ("JC_REDIRECT_URL", "redirect.openshift.io", "redirect_url", "redirect.openshift.io"),
        ("JC_INDEX_PATH", "indexPath", "index_path", "indexPath"),
        ("JC_DEBUG_MODE", "true", "debug_mode", True),
        ("JC_ENABLE_HTTPS", "1", "https_enabled", True),
        ("JC_GATEWAY_TIMEOUT", "30s", "gateway_timeout", timedelta(seconds=30)),
        ("JC_ALLOWED_ORIGINS", "openshift.io,local", "allowed_origins", ["openshift.io", "local"]),
    ])
    def test_environment_value(self, valid_env, env_var, value, accessor, expected):
        valid_env.setenv(env_var, value)
        config = new_configuration()
        assert getattr(config, accessor) == expected

    @pytest.mark.parametrize("accessor,expected", [
        ("postgres_ssl_mode", keys.DEFAULT_POSTGRES_SSL_MODE),
        ("postgres_connection_timeout", keys.DEFAULT_POSTGRES_CONNECTION_TIMEOUT),
        ("postgres_connection_max_idle", keys.DEFAULT_POSTGRES_CONNECTION_MAX_IDLE),
        ("postgres_connection_max_open", keys.DEFAULT_POSTGRES_CONNECTION_MAX_OPEN),
        ("index_path", keys.DEFAULT_INDEX_PATH),
        ("max_request_retry", keys.DEFAULT_MAX_REQUEST_RETRY),
        ("debug_mode", keys.DEFAULT_DEBUG_MODE),
        ("https_enabled", keys.DEFAULT_HTTPS_ENABLED),
        ("gateway_timeout", keys.DEFAULT_GATEWAY_TIMEOUT),
        ("allowed_origins", keys.DEFAULT_ALLOWED_ORIGINS),
    ])
    def test_default_value(self, valid_env, accessor, expected):
        config = new_configuration()
        assert getattr(config, accessor) == expected

    def test_unset_keys_without_default_give_zero_values(self, valid_env):
        config = new_configuration()

        assert config.postgres_host == ""
        assert config.postgres_port == 0
        assert config.auth_token == ""


class TestLiveEnvironment:

    def test_accessors_follow_environment_changes(self, valid_env):
        config = new_configuration()
        assert config.max_request_retry == keys.DEFAULT_MAX_REQUEST_RETRY

        valid_env.setenv("JC_MAX_REQUEST_RETRY", "3")
        assert config.max_request_retry == 3

        valid_env.setenv("JC_ALLOWED_ORIGINS", "a.io,b.io")
        assert config.allowed_origins == ["a.io", "b.io"]

        valid_env.delenv("JC_ALLOWED_ORIGINS")
        assert config.allowed_origins == keys.DEFAULT_ALLOWED_ORIGINS

    def test_malformed_value_after_construction_does_not_raise(self, valid_env):
        config = new_configuration()

        valid_env.setenv("JC_POSTGRES_PORT", "not-a-port")
        assert config.postgres_port == 0

    def test_concurrent_reads(self, valid_env):
        valid_env.setenv("JC_ALLOWED_ORIGINS", "a.io,b.io")
        config = new_configuration()
        results = []

        def read():
            for _ in range(100):
                results.append(config.allowed_origins)

        threads = [threading.Thread(target=read) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 400
        assert all(origins == ["a.io", "b.io"] for origins in results)


class TestImmutability:

    def test_attributes_cannot_be_set(self, valid_env):
        config = new_configuration()

        with pytest.raises(AttributeError):
            config.index_path = "/tmp/other"
        with pytest.raises(AttributeError):
            config.extra = 1
        with pytest.raises(AttributeError):
            del config.index_path

    def test_returned_lists_are_independent(self, valid_env):
        config = new_configuration()
        config.allowed_origins.append("https://evil.io")

        assert config.allowed_origins == keys.DEFAULT_ALLOWED_ORIGINS


class TestString:

    def test_defaults_are_rendered(self, valid_env):
        rendered = str(new_configuration())

        assert f"index_path: {keys.DEFAULT_INDEX_PATH}" in rendered
        assert f"max_request_retry: {keys.DEFAULT_MAX_REQUEST_RETRY}" in rendered
        assert "enable_https: false" in rendered
        assert "gateway_timeout: 5s" in rendered

    def test_secrets_are_never_rendered(self, valid_env):
        valid_env.setenv("JC_AUTH_TOKEN", "tok-123")
        valid_env.setenv("JC_POSTGRES_PASSWORD", "pass-456")
        config = new_configuration()
        rendered = str(config)

        assert "tok-123" not in rendered
        assert "pass-456" not in rendered
        assert "auth.token: ***" in rendered
        assert "postgres.password: ***" in rendered
        # The configuration itself still holds the real values
        assert config.auth_token == "tok-123"
        assert config.postgres_password == "pass-456"

    def test_settings_cover_every_key(self, valid_env):
        config = new_configuration()
        assert list(config.settings()) == config.registry.names()
