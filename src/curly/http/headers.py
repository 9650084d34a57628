# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header line utilities.

Custom request headers are kept as raw ``"Name: value"`` lines, and response
headers arrive as a raw block, so both directions go through the helpers here.
Field names are case-insensitive (RFC 9110).
"""

from __future__ import annotations

from collections.abc import Iterable


def split_header_line(line: str) -> tuple[str, str] | None:
    """Split ``"Name: value"`` into a stripped pair, or None when malformed."""
    name, sep, value = str(line or "").partition(":")
    name = name.strip()
    if not sep or not name:
        return None
    return name, value.strip()


def header_pairs(lines: Iterable[str]) -> list[tuple[str, str]]:
    """Convert header lines into (name, value) pairs, dropping malformed lines."""
    pairs: list[tuple[str, str]] = []
    for line in lines:
        pair = split_header_line(line)
        if pair is not None:
            pairs.append(pair)
    return pairs


def has_header(lines: Iterable[str], name: str) -> bool:
    lower = name.lower()
    return any(pair[0].lower() == lower for pair in header_pairs(lines))


def parse_header_block(block: bytes | str) -> dict[str, str]:
    """
    Parse a raw response header block into a lowercase-keyed dict.

    The status line is skipped. When a block holds several responses (redirect
    chains), later values win. Repeated fields are joined with ``", "``.
    """
    text = block.decode("latin-1") if isinstance(block, (bytes, bytearray)) else str(block or "")
    out: dict[str, str] = {}
    for line in text.splitlines():
        if not line.strip():
            continue
        if line.upper().startswith("HTTP/"):
            out = {}
            continue
        pair = split_header_line(line)
        if pair is None:
            continue
        name = pair[0].lower()
        out[name] = f"{out[name]}, {pair[1]}" if name in out else pair[1]
    return out


def format_header_block(status_line: str, pairs: Iterable[tuple[str, str]] = ()) -> bytes:
    """Render a status line and header pairs as a raw CRLF-terminated block."""
    lines = [status_line.rstrip()]
    lines.extend(f"{name}: {value}" for name, value in pairs)
    return ("\r\n".join(lines) + "\r\n\r\n").encode("latin-1", errors="replace")


__all__ = ["format_header_block", "has_header", "header_pairs", "parse_header_block", "split_header_line"]
