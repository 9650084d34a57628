# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Certificate trust policies.

The executor asks its policy, per call, whether certificate verification may be
skipped. Only ``LocalhostTrustPolicy`` ever says yes, and only for localhost
targets on a host whose server name is localhost. It is a development-only
opt-out and has to be enabled explicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import urlsplit

from .config import HttpSettings, load_http_settings

logger = logging.getLogger(__name__)

LOCALHOST = "localhost"


class TrustPolicy(Protocol):
    def skip_verification(self, url: str) -> bool: ...


@dataclass(frozen=True)
class StrictTrustPolicy:
    """Always verify certificates."""

    def skip_verification(self, url: str) -> bool:  # noqa: ARG002
        return False


@dataclass(frozen=True)
class LocalhostTrustPolicy:
    """Skip verification for localhost targets when running on a localhost server."""

    server_name: str

    def skip_verification(self, url: str) -> bool:
        if LOCALHOST not in (self.server_name or "").lower():
            return False
        host = (urlsplit(str(url or "")).hostname or "").lower()
        if LOCALHOST not in host:
            return False
        # Never acceptable outside local development against trusted endpoints.
        logger.warning("Certificate verification disabled for %s (server name %r)", url, self.server_name)
        return True


def trust_policy_from_settings(settings: HttpSettings | None = None) -> TrustPolicy:
    """Build the localhost policy when CURLY_ALLOW_LOCALHOST_INSECURE is set, else the strict one."""
    settings = settings or load_http_settings()
    if settings.allow_localhost_insecure:
        return LocalhostTrustPolicy(settings.server_name)
    return StrictTrustPolicy()


__all__ = ["LocalhostTrustPolicy", "StrictTrustPolicy", "TrustPolicy", "trust_policy_from_settings"]
