# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process Transport implementations."""

from __future__ import annotations

from collections.abc import Callable, Mapping

from ..errors import ErrorCategory, TransportError
from .client import Transport
from .headers import format_header_block
from .models import RawResponse, TransferOptions

Responder = Callable[[TransferOptions], RawResponse]


def build_raw_response(
    status_code: int,
    body: bytes | str = b"",
    headers: Mapping[str, str] | None = None,
    *,
    reason: str = "",
) -> RawResponse:
    """Assemble a RawResponse with a rendered HTTP/1.1 header block."""
    head = format_header_block(f"HTTP/1.1 {status_code} {reason}", (headers or {}).items())
    return RawResponse.from_parts(status_code, head, body)


class StubTransport(Transport):
    """Deterministic, programmable Transport for tests."""

    def __init__(self, responses: dict[str, RawResponse | Responder | Exception] | None = None):
        self._responses = dict(responses or {})
        self.requests: list[TransferOptions] = []
        self.close_calls = 0

    def add(self, url: str, response: RawResponse | Responder | Exception) -> None:
        self._responses[url] = response

    def add_echo(self, url: str, status_code: int = 200) -> None:
        """Reply to ``url`` with the request body as the response body."""
        self.add(url, lambda options: build_raw_response(status_code, options.body or "", {"Content-Type": "application/json"}))

    def perform(self, options: TransferOptions) -> RawResponse:
        self.requests.append(options)
        if options.verbose is not None:
            options.verbose(f"> {options.method} {options.url}")
        entry = self._responses.get(options.url)
        if entry is None:
            raise TransportError("No stubbed response configured", ErrorCategory.CONNECTION_ERROR)
        if isinstance(entry, Exception):
            raise entry
        response = entry if isinstance(entry, RawResponse) else entry(options)
        if options.verbose is not None:
            options.verbose(f"< {response.http_version} {response.status_code}")
        return response

    def close(self) -> None:
        self.close_calls += 1
