"""Failure reasons reported by conversion functions."""

__all__ = (
    "ConversionError",
    "InvalidInputError",
    "TextEncodingError",
    "ParseError",
    "ShapeMismatchError",
    "SerializationError",
    "SchemaEncodeError",
)


class ConversionError(Exception):
    """Base class for every conversion failure."""


class InvalidInputError(ConversionError):
    """Input is not a JSON-representable structure."""


class TextEncodingError(ConversionError):
    """Text could not be converted to or from UTF-8 bytes."""


class ParseError(ConversionError):
    """Bytes are not syntactically valid JSON."""


class ShapeMismatchError(ConversionError):
    """Parsed JSON does not match the requested target."""


class SerializationError(ConversionError):
    """Untyped JSON object could not be serialized."""


class SchemaEncodeError(ConversionError):
    """Typed object could not be represented as JSON."""
