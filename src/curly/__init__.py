# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
cURLy package entrypoint.

A fluent builder for single JSON-over-HTTP requests. The network transfer is
delegated to an injectable Transport (httpx by default); responses are split,
status-checked, optionally written to a wire log and JSON-decoded.
"""

from .config import HttpSettings, load_http_settings
from .encoding import BodyFormat, encode_body
from .errors import (
    ConfigError,
    CurlyError,
    ErrorCategory,
    HttpStatusError,
    LoggingError,
    ResponseFormatError,
    TransportError,
)
from .http import HttpxTransport, RawResponse, StubTransport, TransferOptions, Transport, create_default_transport
from .log import setup_logging
from .request import Curly
from .response import DecodeFlag, DecodeOptions, ResponseMode
from .trust import LocalhostTrustPolicy, StrictTrustPolicy, TrustPolicy
from .version import __version__

__all__ = [
    "BodyFormat",
    "ConfigError",
    "Curly",
    "CurlyError",
    "DecodeFlag",
    "DecodeOptions",
    "ErrorCategory",
    "HttpSettings",
    "HttpStatusError",
    "HttpxTransport",
    "LocalhostTrustPolicy",
    "LoggingError",
    "RawResponse",
    "ResponseFormatError",
    "ResponseMode",
    "StrictTrustPolicy",
    "StubTransport",
    "TransferOptions",
    "Transport",
    "TransportError",
    "TrustPolicy",
    "create_default_transport",
    "encode_body",
    "load_http_settings",
    "setup_logging",
    "__version__",
]
