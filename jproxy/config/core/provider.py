"""
Configuration source implementations.

This module provides the value sources the resolver walks in precedence
order: compiled-in defaults, an optional YAML file and the process
environment.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple
from pathlib import Path
import os

import yaml

from .errors import ConfigLoadError
from .registry import KeyRegistry
from jproxy.logger import get_jproxy_logger

MISSING = object()


class ConfigSource(ABC):
    """
    Abstract base class for configuration sources.

    A source answers, for a key name, whether it holds a raw value and
    what that value is. Raw values are coerced by the resolver.
    """

    name = "source"

    @abstractmethod
    def lookup(self, key: str) -> Tuple[bool, Any]:
        """Return ``(True, raw)`` when the source holds `key`, else ``(False, None)``."""
        pass

    @abstractmethod
    def keys(self) -> Iterable[str]:
        """Key names currently held by this source."""
        pass

    def __repr__(self):
        return f"{type(self).__name__}()"


class DefaultSource(ConfigSource):
    """
    Source holding the registry defaults, populated once at construction.
    """

    name = "default"

    def __init__(self, registry: KeyRegistry):
        self._values: Dict[str, Any] = registry.defaults()

    def lookup(self, key: str) -> Tuple[bool, Any]:
        value = self._values.get(key, MISSING)
        if value is MISSING:
            return False, None
        return True, value

    def keys(self) -> Iterable[str]:
        return list(self._values)


class MappingSource(ConfigSource):
    """
    In-memory source over a flat ``{dotted.key: raw}`` mapping.
    """

    name = "mapping"

    def __init__(self, values: Optional[Mapping[str, Any]] = None, name: Optional[str] = None):
        self._values = {k.lower(): v for k, v in (values or {}).items() if v is not None}
        if name:
            self.name = name

    def lookup(self, key: str) -> Tuple[bool, Any]:
        value = self._values.get(key, MISSING)
        if value is MISSING:
            return False, None
        return True, value

    def keys(self) -> Iterable[str]:
        return list(self._values)


class FileConfigSource(MappingSource):
    """
    File-based source that reads a YAML document once.

    Nested mappings are flattened into dotted, lower-case key names, so
    ``postgres: {host: db}`` provides ``postgres.host``. The file is never
    re-read after construction.
    """

    name = "file"

    def __init__(self, path: str):
        self.path = Path(path)
        self.logger = get_jproxy_logger().bind(component="FileConfigSource")
        super().__init__(self._load())
        self.logger.debug("Config file loaded", path=str(self.path), keys=len(self._values))

    def _load(self) -> Dict[str, Any]:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigLoadError(f"Fatal error config file: {e}", path=str(self.path)) from e
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise ConfigLoadError(f"Fatal error config file: {self.path}: {e}", path=str(self.path)) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigLoadError(
                f"Fatal error config file: {self.path}: top-level YAML must be a mapping, "
                f"got {type(data).__name__}",
                path=str(self.path)
            )
        return flatten(data)


class EnvironmentSource(ConfigSource):
    """
    Live source over the process environment.

    Every lookup re-reads the environment, so values set after the
    configuration was built are observed. A variable set to the empty
    string counts as present.
    """

    name = "environment"

    def __init__(self, registry: KeyRegistry, prefix: str = "JC",
                 environ: Optional[Mapping[str, str]] = None):
        self.registry = registry
        self.prefix = prefix
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def env_var(self, key: str) -> str:
        return self.registry.get(key).env_var(self.prefix)

    def lookup(self, key: str) -> Tuple[bool, Any]:
        if key not in self.registry:
            return False, None
        value = self.environ.get(self.env_var(key))
        if value is None:
            return False, None
        return True, value

    def keys(self) -> Iterable[str]:
        return [key.name for key in self.registry if key.env_var(self.prefix) in self.environ]

    def __repr__(self):
        return f"EnvironmentSource(prefix={self.prefix!r})"


def flatten(data: Mapping[str, Any], parent: str = "") -> Dict[str, Any]:
    """Flatten nested mappings into ``{dotted.key: value}``; null leaves are dropped."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{parent}.{key}" if parent else str(key)
        full_key = full_key.lower()
        if isinstance(value, dict):
            flat.update(flatten(value, full_key))
        elif value is not None:
            flat[full_key] = value
    return flat
