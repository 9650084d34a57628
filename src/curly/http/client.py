# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport abstraction and factory."""

from typing import Protocol

from ..config import HttpSettings, load_http_settings
from .models import RawResponse, TransferOptions


class Transport(Protocol):
    """Minimal protocol for performing a single HTTP transfer."""

    def perform(self, options: TransferOptions) -> RawResponse: ...

    def close(self) -> None: ...


def create_default_transport(settings: HttpSettings | None = None) -> Transport:
    """Factory for the default httpx-backed transport."""
    from .httpx_client import HttpxTransport

    return HttpxTransport(settings or load_http_settings())
