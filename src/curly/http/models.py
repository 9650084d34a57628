# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transfer option and raw response models exchanged with Transport implementations."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

VerboseSink = Callable[[str], None]


@dataclass
class TransferOptions:
    """Effective option set for a single transfer."""

    url: str
    method: str = "GET"
    body: str | None = None
    headers: list[str] = field(default_factory=list)
    credentials: tuple[str, str] | None = None
    capture_headers: bool = True
    return_transfer: bool = True
    verify_ssl: bool = True
    follow_redirects: bool = False
    timeout: float | None = None
    user_agent: str | None = None
    verbose: VerboseSink | None = None


@dataclass
class RawResponse:
    """Combined header block and body as produced by the transport."""

    status_code: int
    header_size: int
    raw: bytes = b""
    url: str | None = None
    http_version: str = "HTTP/1.1"

    @property
    def header_block(self) -> bytes:
        return self.raw[: self.header_size]

    @property
    def body(self) -> bytes:
        return self.raw[self.header_size :]

    @classmethod
    def from_parts(
        cls,
        status_code: int,
        header_block: bytes | str,
        body: bytes | str,
        *,
        url: str | None = None,
        http_version: str = "HTTP/1.1",
    ) -> RawResponse:
        """Build a response from separated header block and body."""
        head = header_block.encode("latin-1") if isinstance(header_block, str) else bytes(header_block)
        content = body.encode("utf-8") if isinstance(body, str) else bytes(body)
        return cls(
            status_code=status_code,
            header_size=len(head),
            raw=head + content,
            url=url,
            http_version=http_version,
        )
