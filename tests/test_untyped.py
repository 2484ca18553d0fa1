import logging
from collections import OrderedDict
from types import MappingProxyType

import orjson
import pytest

from jsonutils import (
    InvalidInputError,
    ParseError,
    SerializationError,
    ShapeMismatchError,
    TextEncodingError,
    data_to_json_text,
    is_valid_json_object,
    json_text_to_map,
    map_to_json_text,
    try_data_to_json_text,
    try_json_text_to_map,
    try_map_to_json_text,
)


def _cyclic():
    obj = {"name": "root", "children": []}
    obj["children"].append(obj)
    return obj


@pytest.mark.parametrize(
    "obj",
    [
        {},
        {"a": 1, "b": "x"},
        {"nested": {"list": [1, 2.5, None, True, "s"]}},
        {"tuple": (1, 2)},
        OrderedDict(a=1),
        MappingProxyType({"a": MappingProxyType({"b": 1})}),
    ],
)
def test_valid_json_objects(obj):
    assert is_valid_json_object(obj)


@pytest.mark.parametrize(
    "obj",
    [
        None,
        [1, 2, 3],
        "text",
        {1: "int key"},
        {"f": lambda: None},
        {"raw": b"bytes"},
        {"nan": float("nan")},
        {"inf": [float("inf")]},
        {"set": {1, 2}},
        _cyclic(),
    ],
)
def test_invalid_json_objects(obj):
    assert not is_valid_json_object(obj)


def test_shared_references_are_not_cycles():
    shared = [1, 2]
    assert is_valid_json_object({"a": shared, "b": shared})


def test_map_to_json_text_pretty_prints():
    assert map_to_json_text({"a": 1, "b": "x"}) == '{\n  "a": 1,\n  "b": "x"\n}'


def test_map_to_json_text_keeps_insertion_order():
    text = map_to_json_text({"b": 1, "a": 2}, sort_keys=False)
    assert text == '{\n  "b": 1,\n  "a": 2\n}'


def test_map_to_json_text_sorted_keys():
    text = map_to_json_text({"b": 1, "a": {"d": 0, "c": 0}}, sort_keys=True)
    assert text == (
        '{\n  "a": {\n    "c": 0,\n    "d": 0\n  },\n  "b": 1\n}'
    )


@pytest.mark.parametrize(
    "obj",
    [
        {"a": 1, "b": "x"},
        {},
        {"unicode": "привет ☃", "empty": {}, "list": []},
        {"deep": {"deeper": {"deepest": [1, {"x": None}]}}},
        {"numbers": [0, -1, 1.5, 1e-10, 2**63 - 1]},
        {"flags": [True, False, None]},
    ],
)
def test_map_round_trip(obj):
    assert json_text_to_map(map_to_json_text(obj)) == obj


def test_text_round_trip():
    text = '{"z": [1, 2, {"y": null}], "a": "b"}'
    assert json_text_to_map(map_to_json_text(json_text_to_map(text))) == {
        "z": [1, 2, {"y": None}],
        "a": "b",
    }


def test_map_to_json_text_accepts_any_mapping():
    obj = MappingProxyType({"outer": MappingProxyType({"inner": [1, 2]})})
    assert json_text_to_map(map_to_json_text(obj)) == {
        "outer": {"inner": [1, 2]},
    }


def test_map_to_json_text_tuples_become_lists():
    assert json_text_to_map(map_to_json_text({"t": (1, 2)})) == {"t": [1, 2]}


def test_map_to_json_text_none(caplog):
    with caplog.at_level(logging.WARNING, logger="jsonutils.convert"):
        assert map_to_json_text(None) is None

    assert len(caplog.records) == 1
    assert "InvalidInputError" in caplog.records[0].getMessage()


@pytest.mark.parametrize(
    "obj",
    [
        {"f": print},
        {"raw": b"bytes"},
        {1: "int key"},
        {"nan": float("nan")},
        _cyclic(),
    ],
)
def test_map_to_json_text_invalid_input(obj):
    assert map_to_json_text(obj) is None

    result = try_map_to_json_text(obj)
    assert not result.ok
    assert result.value is None
    assert isinstance(result.error, InvalidInputError)


@pytest.mark.parametrize(
    "obj",
    [
        {"big": 2**64},
        {"surrogate": "\ud800"},
    ],
)
def test_map_to_json_text_serialization_error(obj, caplog):
    with caplog.at_level(logging.WARNING, logger="jsonutils.convert"):
        assert map_to_json_text(obj) is None

    assert "SerializationError" in caplog.text

    result = try_map_to_json_text(obj)
    assert isinstance(result.error, SerializationError)
    assert isinstance(result.error.__cause__, orjson.JSONEncodeError)


def test_json_text_to_map():
    assert json_text_to_map('{"a": 1, "b": "x"}') == {"a": 1, "b": "x"}


@pytest.mark.parametrize("text", ["[1,2,3]", "1", '"str"', "null", "true"])
def test_json_text_to_map_top_level_not_object(text, caplog):
    with caplog.at_level(logging.DEBUG, logger="jsonutils.convert"):
        assert json_text_to_map(text) is None

    # discarded silently, only a debug record
    assert [r.levelno for r in caplog.records] == [logging.DEBUG]

    result = try_json_text_to_map(text)
    assert isinstance(result.error, ShapeMismatchError)


@pytest.mark.parametrize("text", ["", "{", '{"a": }', "{'a': 1}", "not json"])
def test_json_text_to_map_parse_error(text, caplog):
    with caplog.at_level(logging.WARNING, logger="jsonutils.convert"):
        assert json_text_to_map(text) is None

    assert "ParseError" in caplog.text

    result = try_json_text_to_map(text)
    assert isinstance(result.error, ParseError)
    assert isinstance(result.error.__cause__, orjson.JSONDecodeError)


def test_json_text_to_map_not_utf8_encodable():
    result = try_json_text_to_map('{"a": "\ud800"}')
    assert isinstance(result.error, TextEncodingError)
    assert isinstance(result.error.__cause__, UnicodeEncodeError)

    assert json_text_to_map('{"a": "\ud800"}') is None


def test_json_text_to_map_not_text():
    result = try_json_text_to_map(b'{"a": 1}')
    assert isinstance(result.error, InvalidInputError)


@pytest.mark.parametrize(
    "data, expected",
    [
        (b'{"a": 1}', '{"a": 1}'),
        (b"not json", "not json"),
        (b'"not json"', '"not json"'),
        (b"", ""),
        ("☃".encode(), "☃"),
        (bytearray(b"[1]"), "[1]"),
        (memoryview(b"{}"), "{}"),
    ],
)
def test_data_to_json_text(data, expected):
    assert data_to_json_text(data) == expected


@pytest.mark.parametrize("data", [b"\xff", b"\xc3", b'{"a": "\xed\xa0\x80"}'])
def test_data_to_json_text_invalid_utf8(data, caplog):
    with caplog.at_level(logging.WARNING, logger="jsonutils.convert"):
        assert data_to_json_text(data) is None

    assert "TextEncodingError" in caplog.text

    result = try_data_to_json_text(data)
    assert isinstance(result.error, TextEncodingError)
    assert isinstance(result.error.__cause__, UnicodeDecodeError)


def test_data_to_json_text_not_bytes():
    assert isinstance(try_data_to_json_text("text").error, InvalidInputError)
    assert data_to_json_text(None) is None


def test_json_text_to_map_big_integer_becomes_float():
    assert json_text_to_map('{"a": 18446744073709551616}') == {
        "a": 1.8446744073709552e19,
    }
