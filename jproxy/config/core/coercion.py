"""
Conversion of raw source values into declared key types.

Environment values are always text; YAML values may already be native
(``int``, ``bool``, ``list``). Both are accepted where unambiguous.
"""

import re
from datetime import date, timedelta
from typing import Any, List, Optional

from .errors import CoercionError
from .redactor import MASK
from .registry import KeyType, is_sensitive
from jproxy.outils.time_parser import to_timedelta

LIST_DELIMITER = ","

_INTEGER = re.compile(r"[+-]?[0-9]+")
_TRUE = frozenset({"true", "t", "1"})
_FALSE = frozenset({"false", "f", "0"})


def to_string(raw: Any) -> str:
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, (str, int, float)):
        return str(raw)
    if isinstance(raw, date):
        # YAML reads unquoted dates and timestamps as native values
        return raw.isoformat()
    raise TypeError(type(raw).__name__)


def to_integer(raw: Any) -> int:
    if isinstance(raw, bool):
        raise TypeError("bool")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and _INTEGER.fullmatch(raw.strip()):
        return int(raw.strip(), 10)
    raise ValueError(raw)


def to_boolean(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    raise ValueError(raw)


def to_duration(raw: Any) -> timedelta:
    if isinstance(raw, timedelta):
        return raw
    if isinstance(raw, bool):
        raise TypeError("bool")
    if isinstance(raw, (int, float)):
        # YAML numbers are read as seconds
        return timedelta(seconds=raw)
    if isinstance(raw, str):
        delta = to_timedelta(raw)
        if delta is not None:
            return delta
    raise ValueError(raw)


def to_string_list(raw: Any) -> List[str]:
    if isinstance(raw, (list, tuple)):
        return [to_string(item) for item in raw]
    text = to_string(raw)
    if text == "":
        return []
    return text.split(LIST_DELIMITER)


_CONVERTERS = {
    KeyType.STRING: to_string,
    KeyType.INTEGER: to_integer,
    KeyType.BOOLEAN: to_boolean,
    KeyType.DURATION: to_duration,
    KeyType.STRING_LIST: to_string_list,
}


def coerce(key_type: KeyType, raw: Any, key: str = "", source: Optional[str] = None) -> Any:
    """
    Convert `raw` to `key_type`.

    Raises:
        CoercionError: If the value cannot be represented in the declared type
    """
    try:
        return _CONVERTERS[key_type](raw)
    except (TypeError, ValueError, OverflowError):
        mask = MASK if is_sensitive(key) else None
        raise CoercionError(key, raw, key_type.value, source, mask=mask) from None
