# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Response post-processing.

Raw transfer output is split into header block and body, the status code is
checked against the accepted range, and the body is decoded as JSON into the
configured shape.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, IntFlag
from types import SimpleNamespace
from typing import Any

from .errors import ConfigError, HttpStatusError, ResponseFormatError

SUCCESS_STATUS_RANGE = range(200, 208)
DEFAULT_MAX_DEPTH = 512

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class ResponseMode(str, Enum):
    MAP = "MAP"
    OBJECT = "OBJECT"

    @classmethod
    def coerce(cls, value: ResponseMode | str) -> ResponseMode:
        if isinstance(value, cls):
            return value
        name = str(value).strip().upper()
        if name == "ARRAY":
            return cls.MAP
        try:
            return cls(name)
        except ValueError as exc:
            raise ConfigError(f"cURLy - Unknown response mode: {value!r} (Expected: MAP, OBJECT)") from exc


class DecodeFlag(IntFlag):
    NONE = 0
    OBJECT_AS_ARRAY = 1
    BIGINT_AS_STRING = 2


@dataclass(frozen=True)
class DecodeOptions:
    max_depth: int = DEFAULT_MAX_DEPTH
    flags: int = 0

    @classmethod
    def coerce(cls, value: DecodeOptions | Mapping[str, Any] | None) -> DecodeOptions:
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        max_depth = value.get("max_depth")
        flags = value.get("flags")
        max_depth = DEFAULT_MAX_DEPTH if max_depth is None else max_depth
        flags = 0 if flags is None else flags
        try:
            max_depth, flags = int(max_depth), int(flags)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"cURLy - Invalid decode options: {dict(value)!r}") from exc
        if max_depth < 1:
            raise ConfigError("cURLy - Decode depth must be greater than 0.")
        if flags < 0:
            raise ConfigError("cURLy - Decode flags must not be negative.")
        return cls(max_depth=max_depth, flags=flags)


def split_response(raw: bytes, header_size: int) -> tuple[bytes, bytes]:
    """Return (header_block, body): the first ``header_size`` bytes and the remainder."""
    size = max(0, min(int(header_size), len(raw)))
    return raw[:size], raw[size:]


def check_status(status_code: int, body: str) -> None:
    if status_code not in SUCCESS_STATUS_RANGE:
        raise HttpStatusError(status_code, body)


def _depth(value: Any) -> int:
    # Each container adds one level; scalars add none. Iterative, so depth is not
    # bounded by the recursion limit.
    deepest = 0
    stack = [(value, 1)]
    while stack:
        node, level = stack.pop()
        if isinstance(node, SimpleNamespace):
            node = vars(node)
        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        deepest = max(deepest, level)
        stack.extend((child, level + 1) for child in children)
    return deepest


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Syntax error, {name} is not valid JSON")


def _parse_int(flags: DecodeFlag):
    def parse(text: str) -> int | str:
        number = int(text)
        if DecodeFlag.BIGINT_AS_STRING in flags and not _INT64_MIN <= number <= _INT64_MAX:
            return text
        return number

    return parse


def decode_body(text: bytes | str, mode: ResponseMode = ResponseMode.MAP, options: DecodeOptions | None = None) -> Any:
    """
    Decode a JSON body as a mapping tree (MAP) or attribute objects (OBJECT).

    Bytes must be valid UTF-8. NaN and Infinity literals are rejected.
    """
    options = options or DecodeOptions()
    flags = DecodeFlag(options.flags & (DecodeFlag.OBJECT_AS_ARRAY | DecodeFlag.BIGINT_AS_STRING))
    as_object = mode is ResponseMode.OBJECT and DecodeFlag.OBJECT_AS_ARRAY not in flags
    try:
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("utf-8")
        value = json.loads(
            text,
            parse_int=_parse_int(flags),
            parse_constant=_reject_constant,
            object_hook=(lambda pairs: SimpleNamespace(**pairs)) if as_object else None,
        )
    except (ValueError, RecursionError) as exc:
        raise ResponseFormatError(f"cURLy - The response is not in a valid JSON format. ({exc})") from exc

    if _depth(value) > options.max_depth:
        raise ResponseFormatError("cURLy - The response is not in a valid JSON format. (Maximum stack depth exceeded)")
    return value


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DecodeFlag",
    "DecodeOptions",
    "ResponseMode",
    "SUCCESS_STATUS_RANGE",
    "check_status",
    "decode_body",
    "split_response",
]
