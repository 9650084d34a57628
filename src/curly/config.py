# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for cURLy."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"cURLy/{__version__}"
DEFAULT_LOG_DIRECTORY = "log"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value


@dataclass
class HttpSettings:
    """Transport and logging defaults."""

    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = False
    verify_ssl: bool = True
    log_directory: str = DEFAULT_LOG_DIRECTORY
    allow_localhost_insecure: bool = False
    server_name: str = ""

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            timeout=_float_env("CURLY_HTTP_TIMEOUT", cls.timeout),
            user_agent=_str_env("CURLY_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("CURLY_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("CURLY_HTTP_VERIFY_SSL", cls.verify_ssl),
            log_directory=_str_env("CURLY_LOG_DIR", cls.log_directory),
            allow_localhost_insecure=_bool_env("CURLY_ALLOW_LOCALHOST_INSECURE", cls.allow_localhost_insecure),
            server_name=os.getenv("CURLY_SERVER_NAME") or os.getenv("SERVER_NAME") or cls.server_name,
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()
