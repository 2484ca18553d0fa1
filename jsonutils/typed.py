"""Schema-driven JSON codec for typed objects.

Any type supported by msgspec can be used: ``msgspec.Struct`` subclasses,
dataclasses, attrs classes, ``TypedDict`` and ``NamedTuple`` types, or
builtin containers of them.
"""

from __future__ import annotations

from typing import Any, TypeVar

import msgspec
import msgspec.inspect
import msgspec.structs
from msgspec import DecodeError, EncodeError, ValidationError

from .json import SORT_KEYS, all_finite


__all__ = (
    "DecodeError",
    "EncodeError",
    "ValidationError",
    "encode",
    "decode",
    "find_custom_type",
)


T = TypeVar("T")


def encode(obj: Any, *, sort_keys: bool = SORT_KEYS) -> bytes:
    """Encode ``obj`` to pretty-printed UTF-8 JSON bytes.

    Raises ``ValueError`` for NaN and infinite floats, which msgspec would
    otherwise write as ``null``.
    """
    builtins = msgspec.to_builtins(
        obj,
        str_keys=True,
        order="sorted" if sort_keys else None,
    )

    if not all_finite(builtins):
        raise ValueError("Out of range float values are not JSON compliant")

    return msgspec.json.format(msgspec.json.encode(builtins), indent=2)


def decode(type_: type[T], raw_data: bytes) -> T:
    """Decode ``raw_data`` into an instance of ``type_``.

    Raises ``msgspec.ValidationError`` when the document does not match
    ``type_`` and ``msgspec.DecodeError`` when it is not valid JSON.
    """
    return msgspec.json.decode(raw_data, type=type_)


def find_custom_type(type_: Any) -> type | None:
    """Return the first type nested in ``type_`` msgspec has no decoder for.

    Raises ``TypeError`` if ``type_`` is not a type at all.
    """
    return _find_custom_type(msgspec.inspect.type_info(type_), set())


def _find_custom_type(node: Any, seen: set[int]) -> type | None:
    if isinstance(node, msgspec.inspect.CustomType):
        return node.cls

    if not isinstance(node, (msgspec.inspect.Type, msgspec.inspect.Field)):
        return None

    # recursive structs share one node
    if id(node) in seen:
        return None

    seen.add(id(node))

    for value in msgspec.structs.astuple(node):
        children = value if isinstance(value, tuple) else (value,)

        for child in children:
            found = _find_custom_type(child, seen)

            if found is not None:
                return found

    return None
