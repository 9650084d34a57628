# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging

import pytest

from curly.config import HttpSettings
from curly.trust import LocalhostTrustPolicy, StrictTrustPolicy, trust_policy_from_settings


def test_strict_policy_never_skips_verification():
    assert StrictTrustPolicy().skip_verification("https://localhost/api") is False


@pytest.mark.parametrize("url", ["https://localhost/api", "https://LOCALHOST:8443/x", "https://app.localhost/"])
def test_localhost_policy_skips_for_localhost_targets(url, caplog):
    with caplog.at_level(logging.WARNING, logger="curly.trust"):
        assert LocalhostTrustPolicy("LocalHost").skip_verification(url) is True
    assert "Certificate verification disabled" in caplog.text


@pytest.mark.parametrize("url", ["https://api.example.com/", "https://127.0.0.1/", "not a url", ""])
def test_localhost_policy_keeps_verification_for_other_targets(url):
    assert LocalhostTrustPolicy("localhost").skip_verification(url) is False


def test_localhost_policy_requires_localhost_server_name():
    assert LocalhostTrustPolicy("").skip_verification("https://localhost/") is False
    assert LocalhostTrustPolicy("www.example.com").skip_verification("https://localhost/") is False


def test_trust_policy_from_settings_is_opt_in():
    assert isinstance(trust_policy_from_settings(HttpSettings()), StrictTrustPolicy)
    policy = trust_policy_from_settings(HttpSettings(allow_localhost_insecure=True, server_name="localhost"))
    assert policy == LocalhostTrustPolicy("localhost")
