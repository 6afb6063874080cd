"""
Key registry for the layered configuration.

This module defines the closed set of recognized setting keys, each with
its declared type, an optional default and optional validation rules.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from .errors import UnknownKeyError

SENSITIVE_MARKERS = ("token", "password")


def is_sensitive(name: str) -> bool:
    """Secrets are recognized by name: tokens and passwords."""
    lowered = name.lower()
    return any(marker in lowered for marker in SENSITIVE_MARKERS)


class KeyType(Enum):
    """Declared types a setting can be coerced to."""
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DURATION = "duration"
    STRING_LIST = "string-list"

    def zero_value(self) -> Any:
        """Value produced when no source holds the key."""
        if self is KeyType.STRING:
            return ""
        if self is KeyType.INTEGER:
            return 0
        if self is KeyType.BOOLEAN:
            return False
        if self is KeyType.DURATION:
            return timedelta(0)
        return []


@dataclass(frozen=True)
class ConfigKey:
    """
    A single recognized setting.

    Names are dotted and lower-case; the first segment names the subsystem
    (``postgres.host``, ``auth.url``). Top-level service settings have no dot
    (``index_path``).
    """
    name: str
    key_type: KeyType = KeyType.STRING
    default: Any = None
    rules: Tuple[Callable[[str, Any], Any], ...] = field(default_factory=tuple)
    doc: str = ""

    @property
    def has_default(self) -> bool:
        return self.default is not None

    @property
    def is_sensitive(self) -> bool:
        """True when the key holds a secret that must not be displayed."""
        return is_sensitive(self.name)

    def env_var(self, prefix: str = "") -> str:
        """Environment variable name of the key, e.g. ``JC_POSTGRES_HOST``."""
        name = self.name.replace(".", "_").upper()
        return f"{prefix.upper()}_{name}" if prefix else name

    def zero_value(self) -> Any:
        return self.key_type.zero_value()


class KeyRegistry:
    """
    Ordered, closed set of configuration keys.

    Iteration follows registration order, which makes validation reports
    and resolved snapshots deterministic.
    """

    def __init__(self, keys: Optional[List[ConfigKey]] = None):
        self._keys: Dict[str, ConfigKey] = {}
        for key in keys or []:
            self.register(key)

    def register(self, key: ConfigKey) -> ConfigKey:
        """
        Add a key to the registry.

        Raises:
            ValueError: If a key with the same name is already registered
        """
        name = key.name.lower()
        if name != key.name:
            raise ValueError(f"Configuration key names must be lower-case: {key.name}")
        if name in self._keys:
            raise ValueError(f"Configuration key already registered: {name}")
        self._keys[name] = key
        return key

    def get(self, name: str) -> ConfigKey:
        """
        Get a registered key by name.

        Raises:
            UnknownKeyError: If the key is not registered
        """
        try:
            return self._keys[name.lower()]
        except KeyError:
            raise UnknownKeyError(name) from None

    def names(self) -> List[str]:
        return list(self._keys)

    def defaults(self) -> Dict[str, Any]:
        """Default values of the keys that declare one."""
        return {name: key.default for name, key in self._keys.items() if key.has_default}

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._keys

    def __iter__(self) -> Iterator[ConfigKey]:
        return iter(self._keys.values())

    def __len__(self) -> int:
        return len(self._keys)
