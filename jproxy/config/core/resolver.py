"""
Precedence-based value resolution.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from .coercion import coerce
from .provider import ConfigSource
from .registry import KeyRegistry


class Resolver:
    """
    Resolves registered keys against an ordered list of sources.

    Sources are given highest precedence first. The first source holding a
    key wins and the remaining ones are not consulted; when none holds it,
    the zero value of the key's type is returned.
    """

    def __init__(self, registry: KeyRegistry, sources: Sequence[ConfigSource]):
        self.registry = registry
        self.sources: Tuple[ConfigSource, ...] = tuple(sources)

    def lookup(self, name: str) -> Tuple[Optional[str], Any]:
        """
        Find the raw value of a key.

        Returns:
            ``(source_name, raw)`` of the winning source, or ``(None, None)``
            when no source holds the key

        Raises:
            UnknownKeyError: If the key is not registered
        """
        key = self.registry.get(name)
        for source in self.sources:
            found, raw = source.lookup(key.name)
            if found:
                return source.name, raw
        return None, None

    def resolve(self, name: str) -> Any:
        """
        Resolve a key to its typed value.

        Raises:
            UnknownKeyError: If the key is not registered
            CoercionError: If the winning raw value does not fit the key's type
        """
        key = self.registry.get(name)
        source_name, raw = self.lookup(key.name)
        if source_name is None:
            return key.zero_value()
        return coerce(key.key_type, raw, key=key.name, source=source_name)

    def resolve_all(self) -> Dict[str, Any]:
        """Typed values of every registered key, in registration order."""
        return {key.name: self.resolve(key.name) for key in self.registry}

    def source_names(self) -> List[str]:
        return [source.name for source in self.sources]
