# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Fluent request builder and executor."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from .config import HttpSettings, load_http_settings
from .encoding import CONTENT_TYPES, BodyFormat, encode_body
from .errors import ConfigError
from .http.client import Transport, create_default_transport
from .http.headers import has_header, parse_header_block
from .http.models import RawResponse, TransferOptions, VerboseSink
from .response import DecodeOptions, ResponseMode, check_status, decode_body, split_response
from .transfer_log import TransferLog
from .trust import TrustPolicy, trust_policy_from_settings

logger = logging.getLogger(__name__)

AUTH_BASIC = "BASIC"
AUTH_OAUTH = "OAUTH"

TRANSPORT_OPTION_KEYS = frozenset(
    {"timeout", "follow_redirects", "verify_ssl", "user_agent", "headers", "capture_headers", "return_transfer"}
)
# Merged last: caller-supplied values for these keys never take effect.
BASELINE_OPTIONS: dict[str, Any] = {"capture_headers": True, "return_transfer": True}


class Curly:
    """
    Chainable HTTP request builder.

    Configuration setters return the instance, verb methods perform one blocking
    request and return the JSON-decoded body::

        todo = Curly("https://api.example.com/todos/1").set_response_mode("OBJECT").get()

    An instance is meant for sequential use by a single caller. Per-call URL
    overrides and bodies are not kept between calls.
    """

    def __init__(
        self,
        url: str,
        transport_options: Mapping[str, Any] | None = None,
        *,
        settings: HttpSettings | None = None,
        transport_factory: Callable[[], Transport] | None = None,
        trust_policy: TrustPolicy | None = None,
    ):
        if not str(url or "").strip():
            raise ConfigError("cURLy - Missing URL.")
        unknown = sorted(set(transport_options or {}) - TRANSPORT_OPTION_KEYS)
        if unknown:
            raise ConfigError(f"cURLy - Error while setting transport options. (Unknown: {', '.join(unknown)})")

        self.url = url
        self.settings = settings or load_http_settings()
        self.transport_options: dict[str, Any] = {**(transport_options or {}), **BASELINE_OPTIONS}
        self.trust_policy = trust_policy or trust_policy_from_settings(self.settings)
        self._transport_factory = transport_factory or (lambda: create_default_transport(self.settings))

        self.custom_headers: list[str] = []
        self.body_format = BodyFormat.FORM
        self.response_mode = ResponseMode.MAP
        self.decode_options = DecodeOptions()
        self.logging_enabled = False
        self.log_directory = self.settings.log_directory
        self._credentials: tuple[str, str] | None = None

        self.response_headers: dict[str, str] = {}
        self.last_status: int | None = None
        self.last_log_path: Path | None = None

    @classmethod
    def instance(cls, url: str = "", transport_options: Mapping[str, Any] | None = None, **kwargs: Any) -> Curly:
        return cls(url, transport_options, **kwargs)

    # Configuration

    def set_logging(self, enabled: bool, directory: str | Path | None = None) -> Curly:
        """Toggle per-request log files. The directory is only touched when a request runs."""
        self.logging_enabled = bool(enabled)
        self.log_directory = str(directory) if directory is not None else self.settings.log_directory
        return self

    def set_body_format(self, body_format: BodyFormat | str) -> Curly:
        self.body_format = BodyFormat.coerce(body_format)
        return self

    def set_response_mode(
        self,
        mode: ResponseMode | str,
        decode_options: DecodeOptions | Mapping[str, Any] | None = None,
    ) -> Curly:
        """Select MAP or OBJECT decoding; ``decode_options`` takes ``max_depth`` and ``flags``."""
        self.response_mode = ResponseMode.coerce(mode)
        self.decode_options = DecodeOptions.coerce(decode_options)
        return self

    def set_authentication(self, method: str, data: Mapping[str, Any]) -> Curly:
        """
        Configure authentication.

        BASIC expects ``username`` and ``password`` and turns on redirect following.
        OAUTH expects ``token`` and replaces the custom headers with a single
        bearer Authorization header. Other methods are ignored.
        """
        data = data or {}
        name = str(method or "").upper()
        if name == AUTH_BASIC:
            if not data.get("username") or not data.get("password"):
                raise ConfigError("cURLy - Missing data for BASIC authentication. (Expected: username, password)")
            self._credentials = (str(data["username"]), str(data["password"]))
            self.transport_options["follow_redirects"] = True
        elif name == AUTH_OAUTH:
            if not data.get("token"):
                raise ConfigError("cURLy - Missing data for OAUTH authentication. (Expected: token)")
            self.custom_headers = [f"Authorization: Bearer {data['token']}"]
        else:
            logger.debug("Ignoring unsupported authentication method %r", method)
        return self

    @property
    def credentials(self) -> tuple[str, str] | None:
        return self._credentials

    # Verbs

    def get(self, url: str = "") -> Any:
        return self._execute("GET", None, url)

    def post(self, fields: Mapping[str, Any], url: str = "") -> Any:
        return self._execute("POST", self._encode(fields), url)

    def put(self, fields: Mapping[str, Any], url: str = "") -> Any:
        return self._execute("PUT", self._encode(fields), url)

    def patch(self, fields: Mapping[str, Any], url: str = "") -> Any:
        return self._execute("PATCH", self._encode(fields), url)

    GET = get
    POST = post
    PUT = put
    PATCH = patch

    # Execution

    def _encode(self, fields: Mapping[str, Any]) -> str:
        if not isinstance(fields, Mapping):
            raise TypeError("Request body fields must be a mapping")
        return encode_body(fields, self.body_format)

    def build_options(
        self,
        method: str,
        body: str | None = None,
        url: str = "",
        verbose: VerboseSink | None = None,
    ) -> TransferOptions:
        """Merge the accumulated configuration into the option set for one call."""
        opts = self.transport_options
        target = url or self.url

        headers = [str(line) for line in opts.get("headers") or []] + list(self.custom_headers)
        if body is not None and not has_header(headers, "Content-Type"):
            headers.append(f"Content-Type: {CONTENT_TYPES[self.body_format]}")

        verify_ssl = bool(opts.get("verify_ssl", self.settings.verify_ssl))
        if self.trust_policy.skip_verification(target):
            verify_ssl = False

        return TransferOptions(
            url=target,
            method=method,
            body=body,
            headers=headers,
            credentials=self._credentials,
            capture_headers=opts["capture_headers"],
            return_transfer=opts["return_transfer"],
            verify_ssl=verify_ssl,
            follow_redirects=bool(opts.get("follow_redirects", self.settings.allow_redirects)),
            timeout=opts.get("timeout"),
            user_agent=opts.get("user_agent"),
            verbose=verbose,
        )

    def _execute(self, method: str, body: str | None, url: str = "") -> Any:
        transfer_log = TransferLog() if self.logging_enabled else None
        options = self.build_options(method, body, url, transfer_log.verbose if transfer_log else None)
        try:
            transport = self._transport_factory()
            try:
                logger.debug("%s %s", method, options.url)
                raw = transport.perform(options)
            finally:
                transport.close()
            return self._process(raw, options, transfer_log)
        finally:
            if transfer_log is not None:
                transfer_log.close()

    def _process(self, raw: RawResponse, options: TransferOptions, transfer_log: TransferLog | None) -> Any:
        header_block, content = split_response(raw.raw, raw.header_size)
        # Lenient text for errors and logs; decoding below checks UTF-8 strictly.
        body = content.decode("utf-8", errors="replace")
        self.response_headers = parse_header_block(header_block)
        self.last_status = raw.status_code
        logger.debug("%s %s -> %s (%d bytes)", options.method, options.url, raw.status_code, len(content))

        check_status(raw.status_code, body)

        if transfer_log is not None:
            transfer_log.write(self.log_directory, options.body, body)
            self.last_log_path = transfer_log.path

        return decode_body(content, self.response_mode, self.decode_options)


__all__ = ["AUTH_BASIC", "AUTH_OAUTH", "BASELINE_OPTIONS", "Curly", "TRANSPORT_OPTION_KEYS"]
