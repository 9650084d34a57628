# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from types import SimpleNamespace

import pytest

from curly.errors import ConfigError, HttpStatusError, ResponseFormatError
from curly.response import (
    DecodeFlag,
    DecodeOptions,
    ResponseMode,
    check_status,
    decode_body,
    split_response,
)


def test_split_response_uses_header_size():
    raw = b"HTTP/1.1 200 OK\r\n\r\n{}"
    assert split_response(raw, 19) == (b"HTTP/1.1 200 OK\r\n\r\n", b"{}")


def test_split_response_edge_sizes():
    raw = b"HTTP/1.1 204 No Content\r\n\r\n"
    assert split_response(raw, 0) == (b"", raw)
    assert split_response(raw, len(raw)) == (raw, b"")
    assert split_response(raw, len(raw) + 10) == (raw, b"")


@pytest.mark.parametrize("code", [200, 201, 204, 207])
def test_check_status_accepts_success_range(code):
    check_status(code, "")


@pytest.mark.parametrize("code", [100, 199, 208, 226, 301, 304, 404, 500])
def test_check_status_rejects_everything_else(code):
    with pytest.raises(HttpStatusError) as excinfo:
        check_status(code, "nope")
    assert excinfo.value.status_code == code
    assert excinfo.value.body == "nope"
    assert f"Code: {code}" in str(excinfo.value)


def test_decode_body_map_and_object_modes():
    text = '{"id": 1, "title": "x", "tags": [{"name": "a"}]}'
    assert decode_body(text) == {"id": 1, "title": "x", "tags": [{"name": "a"}]}

    obj = decode_body(text, ResponseMode.OBJECT)
    assert isinstance(obj, SimpleNamespace)
    assert obj.id == 1
    assert obj.tags[0].name == "a"


def test_decode_body_object_as_array_flag_forces_mapping():
    options = DecodeOptions(flags=DecodeFlag.OBJECT_AS_ARRAY)
    assert decode_body('{"a": {"b": 1}}', ResponseMode.OBJECT, options) == {"a": {"b": 1}}


def test_decode_body_bigint_as_string_flag():
    text = '{"small": 5, "big": 18446744073709551616}'
    assert decode_body(text)["big"] == 18446744073709551616
    decoded = decode_body(text, options=DecodeOptions(flags=DecodeFlag.BIGINT_AS_STRING))
    assert decoded == {"small": 5, "big": "18446744073709551616"}


def test_decode_body_enforces_max_depth():
    assert decode_body("[1]", options=DecodeOptions(max_depth=1)) == [1]
    with pytest.raises(ResponseFormatError) as excinfo:
        decode_body("[[1]]", options=DecodeOptions(max_depth=1))
    assert "depth" in str(excinfo.value)


def test_decode_body_reports_parser_message():
    with pytest.raises(ResponseFormatError) as excinfo:
        decode_body("<html>oops</html>")
    assert "Expecting value" in str(excinfo.value)

    with pytest.raises(ResponseFormatError):
        decode_body("")


def test_decode_options_coerce_defaults_and_validation():
    assert DecodeOptions.coerce(None) == DecodeOptions(max_depth=512, flags=0)
    assert DecodeOptions.coerce({"max_depth": 8}) == DecodeOptions(max_depth=8, flags=0)
    assert DecodeOptions.coerce({"flags": 2}).max_depth == 512
    with pytest.raises(ConfigError):
        DecodeOptions.coerce({"max_depth": "deep"})
    with pytest.raises(ConfigError):
        DecodeOptions.coerce({"max_depth": -1})


def test_response_mode_coerce_accepts_array_alias():
    assert ResponseMode.coerce("array") is ResponseMode.MAP
    assert ResponseMode.coerce("object") is ResponseMode.OBJECT
    with pytest.raises(ConfigError):
        ResponseMode.coerce("xml")


def test_decode_body_accepts_default_max_depth():
    depth = 512
    assert decode_body("[" * depth + "]" * depth) is not None
    nested = decode_body('{"a":' * depth + "1" + "}" * depth, ResponseMode.OBJECT)
    assert isinstance(nested, SimpleNamespace)


def test_decode_body_rejects_one_level_past_default_max_depth():
    depth = 513
    with pytest.raises(ResponseFormatError) as excinfo:
        decode_body("[" * depth + "]" * depth)
    assert "Maximum stack depth exceeded" in str(excinfo.value)


@pytest.mark.parametrize("text", ['{"a": NaN}', "[Infinity]", '{"b": -Infinity}'])
def test_decode_body_rejects_non_standard_constants(text):
    with pytest.raises(ResponseFormatError) as excinfo:
        decode_body(text)
    assert "is not valid JSON" in str(excinfo.value)


def test_decode_body_requires_utf8_bytes():
    assert decode_body('{"name":"bär"}'.encode("utf-8")) == {"name": "bär"}
    with pytest.raises(ResponseFormatError):
        decode_body(b'{"name":"\xff\xfe"}')


@pytest.mark.parametrize("options", [{"max_depth": 0}, {"flags": -1}])
def test_decode_options_reject_zero_depth_and_negative_flags(options):
    with pytest.raises(ConfigError):
        DecodeOptions.coerce(options)


def test_decode_options_treat_none_as_default():
    assert DecodeOptions.coerce({"max_depth": None, "flags": None}) == DecodeOptions()
