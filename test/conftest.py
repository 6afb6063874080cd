"""
Shared pytest configuration and fixtures for the configuration tests.
"""

import os
import textwrap

import pytest

from jproxy.config.proxy.keys import ENV_PREFIX, build_proxy_registry


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """
    Remove every proxy variable from the process environment so tests never
    see values leaking from the host or from each other.
    """
    for name in list(os.environ):
        if name.startswith(f"{ENV_PREFIX}_"):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def registry():
    """A fresh proxy key registry."""
    return build_proxy_registry()


@pytest.fixture
def yaml_file(tmp_path):
    """
    Factory writing a YAML document to a temporary file and returning its path.
    """
    def _write(content: str, name: str = "config.yaml") -> str:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def valid_env(clean_env):
    """Environment holding the settings the proxy validates."""
    clean_env.setenv("JC_AUTH_URL", "https://auth.example.io")
    return clean_env
