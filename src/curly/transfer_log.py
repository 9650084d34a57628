# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-request wire log files."""

from __future__ import annotations

import io
import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from .errors import LoggingError

logger = logging.getLogger(__name__)

LOG_FILE_PREFIX = "cURLy_"
CRLF = "\r\n"


def log_file_name(moment: datetime) -> str:
    """``cURLy_<dd_mm_YYYY_HH_MM_SS>_<microseconds>.txt``."""
    return f"{LOG_FILE_PREFIX}{moment:%d_%m_%Y_%H_%M_%S}_{moment.microsecond:06d}.txt"


class TransferLog:
    """
    Verbose diagnostics buffer for one request, persisted as a single log file.

    The transport writes curl-style lines through ``verbose``; ``write`` combines
    them with the request and response bodies. ``close`` drains the buffer and
    must be called on every exit path.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._buffer = io.StringIO()
        self._clock = clock
        self.path: Path | None = None

    def verbose(self, line: str) -> None:
        self._buffer.write(line + CRLF)

    def drain(self) -> str:
        self._buffer.seek(0)
        return self._buffer.read()

    def render(self, request_body: str | None, response_body: str) -> str:
        text = self.drain() + CRLF
        text += "cURLy Request:" + CRLF + (request_body or "") + CRLF
        text += CRLF + "Response:" + CRLF + response_body
        return text

    def write(self, directory: str | Path, request_body: str | None, response_body: str) -> int:
        """Write the log file into ``directory`` (created recursively) and return bytes written."""
        target_dir = Path(directory)
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            if not target_dir.is_dir():
                raise LoggingError(f"cURLy - Log directory {directory} was not created. ({exc})", str(directory)) from exc

        path = target_dir / log_file_name(self._clock())
        try:
            written = path.write_bytes(self.render(request_body, response_body).encode("utf-8"))
        except OSError as exc:
            raise LoggingError(f"cURLy - Log file {path} could not be written. ({exc})", str(directory)) from exc

        self.path = path
        logger.debug("Wrote %d bytes to %s", written, path)
        return written

    def close(self) -> None:
        if not self._buffer.closed:
            self.drain()
            self._buffer.close()


__all__ = ["LOG_FILE_PREFIX", "TransferLog", "log_file_name"]
