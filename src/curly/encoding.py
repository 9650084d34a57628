# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request body serialization."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Any
from urllib.parse import urlencode

from .errors import ConfigError


class BodyFormat(str, Enum):
    FORM = "FORM"
    JSON = "JSON"

    @classmethod
    def coerce(cls, value: BodyFormat | str) -> BodyFormat:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as exc:
            raise ConfigError(f"cURLy - Unknown body format: {value!r} (Expected: FORM, JSON)") from exc


CONTENT_TYPES = {
    BodyFormat.FORM: "application/x-www-form-urlencoded",
    BodyFormat.JSON: "application/json",
}


def _form_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def _flatten(prefix: str, value: Any) -> Iterator[tuple[str, str]]:
    # Nested containers use bracket keys: a[b]=1, a[0]=x.
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, inner in value.items():
            yield from _flatten(f"{prefix}[{key}]", inner)
    elif isinstance(value, (list, tuple)):
        for index, inner in enumerate(value):
            yield from _flatten(f"{prefix}[{index}]", inner)
    else:
        yield prefix, _form_scalar(value)


def form_encode(fields: Mapping[str, Any]) -> str:
    """URL-encode ``fields`` as ``key=value&key2=value2`` with percent-encoded values."""
    pairs: list[tuple[str, str]] = []
    for key, value in fields.items():
        pairs.extend(_flatten(str(key), value))
    return urlencode(pairs)


def json_encode(fields: Mapping[str, Any]) -> str:
    return json.dumps(fields, separators=(",", ":"), ensure_ascii=False)


def encode_body(fields: Mapping[str, Any], body_format: BodyFormat = BodyFormat.FORM) -> str:
    """Serialize body fields according to ``body_format``."""
    if body_format is BodyFormat.JSON:
        return json_encode(fields)
    return form_encode(fields)


__all__ = ["BodyFormat", "CONTENT_TYPES", "encode_body", "form_encode", "json_encode"]
