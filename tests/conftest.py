"""
Global pytest configuration and fixtures.
"""

import os
import socket

import pytest

from nbprovider.sdk.config import ResolvedConfig


@pytest.fixture(autouse=True)
def clean_netbox_env(monkeypatch):
    """Remove NETBOX_* variables so tests never see the developer's environment."""
    for name in list(os.environ):
        if name.startswith("NETBOX_"):
            monkeypatch.delenv(name)


@pytest.fixture
def no_network(monkeypatch):
    """Fail the test if anything tries to open a network connection."""
    attempts: list[object] = []

    def refuse_connect(self, address):
        attempts.append(address)
        raise AssertionError(f"unexpected network connection to {address!r}")

    def refuse_create_connection(address, *args, **kwargs):
        attempts.append(address)
        raise AssertionError(f"unexpected network connection to {address!r}")

    monkeypatch.setattr(socket.socket, "connect", refuse_connect)
    monkeypatch.setattr(socket.socket, "connect_ex", refuse_connect)
    monkeypatch.setattr(socket, "create_connection", refuse_create_connection)
    return attempts


@pytest.fixture
def resolved_config() -> ResolvedConfig:
    return ResolvedConfig(
        server_url="https://netbox.example.com",
        api_token="0123456789abcdef",
    )
