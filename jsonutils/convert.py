"""Conversions between JSON text, JSON bytes and Python objects.

Every conversion comes in two flavours. ``try_*`` functions return a
:class:`Result` holding either the converted value or the reason of the
failure. The plain functions return the value, or ``None`` after logging
the failure reason.
"""

from __future__ import annotations

import logging
import reprlib
from collections.abc import Mapping
from typing import Any, Generic, NamedTuple, TypeVar

from . import json, typed
from .errors import (
    ConversionError,
    InvalidInputError,
    ParseError,
    SchemaEncodeError,
    SerializationError,
    ShapeMismatchError,
    TextEncodingError,
)


__all__ = (
    "Result",
    "try_map_to_json_text",
    "try_json_text_to_map",
    "try_data_to_json_text",
    "try_encode_to_json_text",
    "try_encode_to_json_data",
    "try_decode_from_json_text",
    "try_decode_from_json_data",
    "map_to_json_text",
    "json_text_to_map",
    "data_to_json_text",
    "encode_to_json_text",
    "encode_to_json_data",
    "decode_from_json_text",
    "decode_from_json_data",
)


log: logging.Logger = logging.getLogger(__name__)


T = TypeVar("T")


class Result(NamedTuple, Generic[T]):
    """Outcome of a conversion: a value or the failure reason."""

    value: T | None = None
    error: ConversionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error

        # ignore: value is set on success
        return self.value  # type: ignore[return-value]


def _failure(
    error: ConversionError,
    cause: BaseException | None = None,
) -> Result[Any]:
    error.__cause__ = cause
    return Result(error=error)


def _encode_text(text: Any) -> bytes:
    if not isinstance(text, str):
        raise InvalidInputError(
            f"Expected str, got {type(text).__name__}",
        )

    try:
        return text.encode("utf-8")

    except UnicodeEncodeError as e:
        raise TextEncodingError(
            f"Failed to convert string to data: {e}",
        ) from e


def _is_bytes_like(data: Any) -> bool:
    return isinstance(data, (bytes, bytearray, memoryview))


# Untyped objects


def try_map_to_json_text(
    mapping: Mapping[str, Any] | None,
    *,
    sort_keys: bool = json.SORT_KEYS,
) -> Result[str]:
    try:
        valid = mapping is not None and json.is_valid_json_object(mapping)

    except RecursionError:
        valid = False

    if not valid:
        return _failure(
            InvalidInputError(f"Invalid JSON object: {reprlib.repr(mapping)}"),
        )

    try:
        raw = json.dumps(mapping, sort_keys=sort_keys)

    except json.JSONEncodeError as e:
        return _failure(SerializationError(f"JSON serialization error: {e}"), e)

    return try_data_to_json_text(raw)


def try_json_text_to_map(text: str) -> Result[dict[str, Any]]:
    """Parse JSON text, accepting only a top-level object.

    Integers outside the 64-bit range are parsed by orjson as floats, so
    such values lose precision.
    """
    try:
        raw = _encode_text(text)

    except ConversionError as e:
        return Result(error=e)

    try:
        obj = json.loads(raw)

    except json.JSONDecodeError as e:
        return _failure(ParseError(f"JSON deserialization error: {e}"), e)

    if not isinstance(obj, dict):
        return _failure(
            ShapeMismatchError(
                f"Expected JSON object, got {type(obj).__name__}",
            ),
        )

    return Result(obj)


def try_data_to_json_text(data: bytes | bytearray | memoryview) -> Result[str]:
    """Decode UTF-8 bytes to text. JSON validity is not checked."""
    if not _is_bytes_like(data):
        return _failure(
            InvalidInputError(f"Expected bytes, got {type(data).__name__}"),
        )

    try:
        return Result(bytes(data).decode("utf-8"))

    except UnicodeDecodeError as e:
        return _failure(
            TextEncodingError(f"Failed to encode JSON data to string: {e}"),
            e,
        )


# Typed objects


def try_encode_to_json_data(
    obj: Any,
    *,
    sort_keys: bool = json.SORT_KEYS,
) -> Result[bytes]:
    try:
        return Result(typed.encode(obj, sort_keys=sort_keys))

    except (
        typed.EncodeError,
        TypeError,
        ValueError,
        OverflowError,
        RecursionError,
    ) as e:
        return _failure(SchemaEncodeError(f"Encoding error: {e}"), e)


def try_encode_to_json_text(
    obj: Any,
    *,
    sort_keys: bool = json.SORT_KEYS,
) -> Result[str]:
    result = try_encode_to_json_data(obj, sort_keys=sort_keys)

    if not result.ok:
        return result

    return try_data_to_json_text(result.value)


def try_decode_from_json_data(
    type_: type[T],
    data: bytes | bytearray | memoryview,
) -> Result[T]:
    if not _is_bytes_like(data):
        return _failure(
            InvalidInputError(f"Expected bytes, got {type(data).__name__}"),
        )

    try:
        custom = typed.find_custom_type(type_)

    except TypeError as e:
        return _failure(
            InvalidInputError(f"Unsupported target type {type_!r}: {e}"),
            e,
        )

    if custom is not None:
        return _failure(
            InvalidInputError(
                f"Unsupported target type {type_!r}: no decoder for {custom!r}",
            ),
        )

    try:
        return Result(typed.decode(type_, data))

    # ValidationError is a subclass of DecodeError, check it first
    except typed.ValidationError as e:
        return _failure(ShapeMismatchError(f"Decoding error: {e}"), e)

    except typed.DecodeError as e:
        return _failure(ParseError(f"Decoding error: {e}"), e)

    except TypeError as e:
        return _failure(
            InvalidInputError(f"Unsupported target type {type_!r}: {e}"),
            e,
        )


def try_decode_from_json_text(type_: type[T], text: str) -> Result[T]:
    try:
        raw = _encode_text(text)

    except ConversionError as e:
        return Result(error=e)

    return try_decode_from_json_data(type_, raw)


# Convenience wrappers, None on failure


def _value_or_none(result: Result[T], level: int = logging.WARNING) -> T | None:
    if result.error is not None:
        log.log(level, "%s: %s", type(result.error).__name__, result.error)
        return None

    return result.value


def map_to_json_text(
    mapping: Mapping[str, Any] | None,
    *,
    sort_keys: bool = json.SORT_KEYS,
) -> str | None:
    """Serialize a JSON object to pretty-printed text.

    Returns ``None`` if ``mapping`` is missing, is not a valid JSON object
    or cannot be serialized.
    """
    return _value_or_none(try_map_to_json_text(mapping, sort_keys=sort_keys))


def json_text_to_map(text: str) -> dict[str, Any] | None:
    """Parse JSON text into a dict.

    Returns ``None`` for invalid text and for documents whose top-level
    value is not an object. The latter is logged at DEBUG level only.
    """
    result = try_json_text_to_map(text)

    if isinstance(result.error, ShapeMismatchError):
        return _value_or_none(result, logging.DEBUG)

    return _value_or_none(result)


def data_to_json_text(data: bytes | bytearray | memoryview) -> str | None:
    return _value_or_none(try_data_to_json_text(data))


def encode_to_json_text(
    obj: Any,
    *,
    sort_keys: bool = json.SORT_KEYS,
) -> str | None:
    return _value_or_none(try_encode_to_json_text(obj, sort_keys=sort_keys))


def encode_to_json_data(
    obj: Any,
    *,
    sort_keys: bool = json.SORT_KEYS,
) -> bytes | None:
    return _value_or_none(try_encode_to_json_data(obj, sort_keys=sort_keys))


def decode_from_json_text(type_: type[T], text: str) -> T | None:
    """Decode JSON text into an instance of ``type_``, ``None`` on failure."""
    return _value_or_none(try_decode_from_json_text(type_, text))


def decode_from_json_data(
    type_: type[T],
    data: bytes | bytearray | memoryview,
) -> T | None:
    """Decode JSON bytes into an instance of ``type_``, ``None`` on failure."""
    return _value_or_none(try_decode_from_json_data(type_, data))
