"""Pytest configuration for snipeek tests."""

from __future__ import annotations

import pytest

from tests.fixtures.client_hello import CLIENT_HELLO_GOOGLE, CLIENT_HELLO_WITHOUT_SNI


@pytest.fixture
def google_client_hello() -> bytes:
    """A captured ClientHello carrying SNI www.google.com."""
    return CLIENT_HELLO_GOOGLE


@pytest.fixture
def client_hello_without_sni() -> bytes:
    """A captured ClientHello without an SNI extension."""
    return CLIENT_HELLO_WITHOUT_SNI
