# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport exports."""

from .adapters import StubTransport, build_raw_response
from .client import Transport, create_default_transport
from .headers import parse_header_block
from .httpx_client import HttpxTransport
from .models import RawResponse, TransferOptions

__all__ = [
    "HttpxTransport",
    "RawResponse",
    "StubTransport",
    "TransferOptions",
    "Transport",
    "build_raw_response",
    "create_default_transport",
    "parse_header_block",
]
