"""Built-in type mappings and the default registries."""

import base64
import re
import uuid
from collections import OrderedDict
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Tuple

from .registry import Kind, Registry, create_mapping


# Largest integer the interchange format's number type holds exactly.
MAX_SAFE_INTEGER = 2 ** 53 - 1

_REGEX_FLAGS: Tuple[Tuple[str, int], ...] = (
    ("a", re.ASCII),
    ("i", re.IGNORECASE),
    ("m", re.MULTILINE),
    ("s", re.DOTALL),
    ("x", re.VERBOSE),
)


class BigInt(int):
    """Integer that always travels as an arbitrary-precision decimal string."""

    def __repr__(self) -> str:
        return f"BigInt({int(self)})"


def _is_bigint(value: Any) -> bool:
    if isinstance(value, BigInt):
        return True
    return type(value) is int and abs(value) > MAX_SAFE_INTEGER


def _has_non_string_key(value: Any) -> bool:
    return isinstance(value, dict) and any(not isinstance(key, str) for key in value)


def _sorted_if_possible(values: Iterable[Any]) -> List[Any]:
    values = list(values)
    try:
        return sorted(values)
    except TypeError:
        # Mixed member types keep iteration order
        return values


def datetime_to_iso(value: datetime) -> str:
    """
    Render a datetime as ISO-8601.

    Millisecond precision is used when it is exact, microseconds otherwise.
    A zero UTC offset is written as ``Z``.
    """
    timespec = "milliseconds" if value.microsecond % 1000 == 0 else "microseconds"
    text = value.isoformat(timespec=timespec)
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def datetime_from_iso(text: str) -> datetime:
    """Parse the output of datetime_to_iso."""
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def pattern_to_pair(pattern: "re.Pattern") -> List[str]:
    """Convert a compiled pattern to ``[source, flags]``."""
    if not isinstance(pattern.pattern, str):
        raise TypeError("Only str patterns are portable, got a bytes pattern")
    flags = "".join(letter for letter, flag in _REGEX_FLAGS if pattern.flags & flag)
    return [pattern.pattern, flags]


def pattern_from_pair(pair: List[str]) -> "re.Pattern":
    """Compile a pattern from ``[source, flags]``."""
    source, letters = pair
    lookup = dict(_REGEX_FLAGS)
    flags = 0
    for letter in letters:
        if letter not in lookup:
            raise ValueError(f"Unknown pattern flag: {letter!r}")
        flags |= lookup[letter]
    return re.compile(source, flags)


def _hashable(key: Any) -> Any:
    # Tuples come back from JSON as arrays
    if isinstance(key, list):
        return tuple(_hashable(item) for item in key)
    return key


def _members(items: Iterable[Any]) -> List[Any]:
    return [_hashable(item) for item in items]


def _pairs_to_dict(pairs: List[List[Any]]) -> Dict[Any, Any]:
    return {_hashable(key): value for key, value in pairs}


def _items(value: Dict[Any, Any]) -> List[List[Any]]:
    return [[key, item] for key, item in value.items()]


DEFAULT_MAPPINGS = (
    create_mapping(datetime, datetime_to_iso, datetime_from_iso),
    create_mapping(re.Pattern, pattern_to_pair, pattern_from_pair),
    create_mapping(
        OrderedDict,
        _items,
        lambda pairs: OrderedDict((_hashable(key), value) for key, value in pairs)
    ),
    create_mapping(Kind("Map", _has_non_string_key), _items, _pairs_to_dict),
    create_mapping(set, _sorted_if_possible, lambda items: set(_members(items))),
    create_mapping(Kind("bigint", _is_bigint), lambda value: str(int(value)), lambda text: BigInt(int(text))),
)

EXTENDED_MAPPINGS = (
    create_mapping(date, date.isoformat, date.fromisoformat),
    create_mapping(time, lambda value: value.isoformat(), time.fromisoformat),
    create_mapping(
        timedelta,
        lambda value: [value.days, value.seconds, value.microseconds],
        lambda parts: timedelta(days=parts[0], seconds=parts[1], microseconds=parts[2])
    ),
    create_mapping(Decimal, str, Decimal),
    create_mapping(uuid.UUID, str, uuid.UUID),
    create_mapping(
        bytes,
        lambda value: base64.b64encode(value).decode("ascii"),
        lambda text: base64.b64decode(text.encode("ascii"))
    ),
    create_mapping(frozenset, _sorted_if_possible, lambda items: frozenset(_members(items))),
    create_mapping(complex, lambda value: [value.real, value.imag], lambda parts: complex(*parts)),
)

default_registry = Registry(DEFAULT_MAPPINGS)

extended_registry = default_registry.extend(*EXTENDED_MAPPINGS)
