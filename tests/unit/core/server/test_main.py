"""Tests for the server entry point's bind guard."""

from __future__ import annotations

import pytest

from apex.core.config.settings import Settings
from apex.core.server.main import check_bind, is_loopback_host


@pytest.mark.parametrize("host", ["localhost", "127.0.0.1", "::1"])
def test_loopback_hosts(host):
    assert is_loopback_host(host)


@pytest.mark.parametrize("host", ["0.0.0.0", "192.168.1.20", "apex.example"])
def test_non_loopback_hosts(host):
    assert not is_loopback_host(host)


def test_public_bind_refused():
    with pytest.raises(RuntimeError, match="no auth layer"):
        check_bind(Settings(apex_host="0.0.0.0"))


def test_public_bind_allowed_with_override():
    check_bind(Settings(apex_host="0.0.0.0", apex_allow_insecure_bind=True))
