"""Convenience conversions between JSON and Python objects."""

from .convert import (
    Result,
    data_to_json_text,
    decode_from_json_data,
    decode_from_json_text,
    encode_to_json_data,
    encode_to_json_text,
    json_text_to_map,
    map_to_json_text,
    try_data_to_json_text,
    try_decode_from_json_data,
    try_decode_from_json_text,
    try_encode_to_json_data,
    try_encode_to_json_text,
    try_json_text_to_map,
    try_map_to_json_text,
)
from .errors import (
    ConversionError,
    InvalidInputError,
    ParseError,
    SchemaEncodeError,
    SerializationError,
    ShapeMismatchError,
    TextEncodingError,
)
from .json import is_valid_json_object


__all__ = (
    "ConversionError",
    "InvalidInputError",
    "ParseError",
    "Result",
    "SchemaEncodeError",
    "SerializationError",
    "ShapeMismatchError",
    "TextEncodingError",
    "data_to_json_text",
    "decode_from_json_data",
    "decode_from_json_text",
    "encode_to_json_data",
    "encode_to_json_text",
    "is_valid_json_object",
    "json_text_to_map",
    "map_to_json_text",
    "try_data_to_json_text",
    "try_decode_from_json_data",
    "try_decode_from_json_text",
    "try_encode_to_json_data",
    "try_encode_to_json_text",
    "try_json_text_to_map",
    "try_map_to_json_text",
)
