"""Module provides interface to the untyped JSON codec."""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from typing import Any, Final

import orjson
from orjson import JSONDecodeError, JSONEncodeError


__all__ = (
    "JSONDecodeError",
    "JSONEncodeError",
    "SORT_KEYS",
    "all_finite",
    "is_valid_json_object",
    "loads",
    "dumps",
)


SORT_KEYS: Final[bool] = os.environ.get("JSONUTILS_SORT_KEYS", "").lower() in (
    "1",
    "true",
    "yes",
)

_SCALARS: Final = (str, int, float, bool, type(None))


def is_valid_json_object(obj: Any) -> bool:
    """Check that ``obj`` is a mapping made only of JSON data model values.

    Keys must be strings, floats must be finite and the structure must not
    contain cycles.
    """
    if not isinstance(obj, Mapping):
        return False

    return _is_valid_value(obj, set())


def _is_valid_value(value: Any, parents: set[int]) -> bool:
    if isinstance(value, _SCALARS):
        return not isinstance(value, float) or math.isfinite(value)

    if isinstance(value, (Mapping, list, tuple)):
        if id(value) in parents:
            return False

        parents.add(id(value))

        try:
            if isinstance(value, Mapping):
                return all(
                    isinstance(k, str) and _is_valid_value(v, parents)
                    for k, v in value.items()
                )

            return all(_is_valid_value(i, parents) for i in value)

        finally:
            parents.discard(id(value))

    return False


def all_finite(value: Any) -> bool:
    """Check that no float nested in builtin containers is NaN or infinite."""
    if isinstance(value, float):
        return math.isfinite(value)

    if isinstance(value, Mapping):
        return all(all_finite(i) for i in value.values())

    if isinstance(value, (list, tuple)):
        return all(all_finite(i) for i in value)

    return True


def loads(raw_data: bytes | str) -> Any:
    return orjson.loads(raw_data)


def dumps(obj: Any, *, sort_keys: bool = SORT_KEYS) -> bytes:
    """Serialize ``obj`` to pretty-printed UTF-8 JSON bytes."""
    option = orjson.OPT_INDENT_2

    if sort_keys:
        option |= orjson.OPT_SORT_KEYS

    return orjson.dumps(obj, default=_default, option=option)


def _default(obj: Any) -> Any:
    # orjson serializes only dict, other mappings are copied
    if isinstance(obj, Mapping):
        return dict(obj)

    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")
