# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class CurlyError(RuntimeError):
    """Base class for every error raised by cURLy."""


class ConfigError(CurlyError):
    """Invalid builder configuration (empty URL, incomplete credentials, bad option)."""


class TransportError(CurlyError):
    """The transport failed to dispatch or complete the request."""

    def __init__(self, message: str, code: ErrorCategory = ErrorCategory.UNKNOWN_ERROR):
        super().__init__(f"cURLy - Transport error ({code.value}): {message}")
        self.message = message
        self.code = code


class HttpStatusError(CurlyError):
    """The response status is outside the accepted 200-207 range."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"cURLy - HTTP Error - Code: {status_code} Response: {body}")
        self.status_code = status_code
        self.body = body


class LoggingError(CurlyError):
    """The per-request log could not be written."""

    def __init__(self, message: str, directory: str):
        super().__init__(message)
        self.directory = directory


class ResponseFormatError(CurlyError):
    """The response body could not be decoded as JSON."""


def categorize_exception(exc: Exception) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    cause = exc.__cause__ or exc.__context__
    if isinstance(exc, (ssl.SSLError, ssl.CertificateError)) or isinstance(cause, (ssl.SSLError, ssl.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)) or isinstance(cause, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.RemoteProtocolError, httpx.LocalProtocolError, httpx.UnsupportedProtocol)):
        return ErrorCategory.PROTOCOL_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


__all__ = [
    "ConfigError",
    "CurlyError",
    "ErrorCategory",
    "HttpStatusError",
    "LoggingError",
    "ResponseFormatError",
    "TransportError",
    "categorize_exception",
]
