# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed Transport implementation."""

from __future__ import annotations

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import TransportError, categorize_exception
from .client import Transport
from .headers import format_header_block, has_header, header_pairs
from .models import RawResponse, TransferOptions, VerboseSink


def _status_line(response: httpx.Response) -> str:
    return f"{response.http_version} {response.status_code} {response.reason_phrase}"


def _raw_pairs(headers: httpx.Headers) -> list[tuple[str, str]]:
    return [(name.decode("latin-1"), value.decode("latin-1")) for name, value in headers.raw]


def _verbose_hooks(sink: VerboseSink) -> dict[str, list]:
    """Event hooks emitting curl-style verbose lines (``*`` info, ``>`` sent, ``<`` received)."""

    def on_request(request: httpx.Request) -> None:
        port = request.url.port or (443 if request.url.scheme == "https" else 80)
        sink(f"* Connecting to {request.url.host} port {port}")
        sink(f"> {request.method} {request.url.raw_path.decode('ascii', errors='replace')} HTTP/1.1")
        for name, value in _raw_pairs(request.headers):
            sink(f"> {name}: {value}")
        sink(">")

    def on_response(response: httpx.Response) -> None:
        sink(f"< {_status_line(response)}")
        for name, value in _raw_pairs(response.headers):
            sink(f"< {name}: {value}")
        sink("<")

    return {"request": [on_request], "response": [on_response]}


class HttpxTransport(Transport):
    """Synchronous httpx transport; one client per instance, closed by ``close()``."""

    def __init__(self, settings: HttpSettings | None = None, *, http_transport: httpx.BaseTransport | None = None):
        self.settings = settings or load_http_settings()
        self._http_transport = http_transport
        self._client: httpx.Client | None = None

    def _open(self, options: TransferOptions) -> httpx.Client:
        self.close()
        kwargs: dict = {
            "follow_redirects": options.follow_redirects,
            "timeout": options.timeout if options.timeout is not None else self.settings.timeout,
            "verify": options.verify_ssl,
            "event_hooks": _verbose_hooks(options.verbose) if options.verbose is not None else {},
        }
        if self._http_transport is not None:
            kwargs["transport"] = self._http_transport
        self._client = httpx.Client(**kwargs)
        return self._client

    def perform(self, options: TransferOptions) -> RawResponse:
        headers = header_pairs(options.headers)
        if not has_header(options.headers, "User-Agent"):
            headers.insert(0, ("User-Agent", options.user_agent or self.settings.user_agent))

        client = self._open(options)
        try:
            response = client.request(
                options.method,
                options.url,
                headers=headers,
                content=options.body.encode("utf-8") if options.body is not None else None,
                auth=options.credentials,
            )
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
            raise TransportError(str(exc) or type(exc).__name__, categorize_exception(exc)) from exc

        head = b""
        if options.capture_headers:
            for hop in [*response.history, response]:
                head += format_header_block(_status_line(hop), _raw_pairs(hop.headers))
        body = response.content if options.return_transfer else b""

        return RawResponse(
            status_code=response.status_code,
            header_size=len(head),
            raw=head + body,
            url=str(response.url),
            http_version=response.http_version,
        )

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
