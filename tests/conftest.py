"""Pytest configuration and fixtures."""

from typing import Callable

import httpx
import pytest

from fake_api import LinkStore, create_fake_api
from tinylink.api.client import LinkApiClient
from tinylink.services.link_repository import LinkRepository

BASE_ADDRESS = "http://testserver"


class FakePrompt:
    """UserPrompt that records every interaction."""

    def __init__(self, confirm_answer: bool = True, copy_ok: bool = True):
        self.confirm_answer = confirm_answer
        self.copy_ok = copy_ok
        self.confirmations: list[str] = []
        self.notices: list[str] = []
        self.copied: list[str] = []

    def confirm(self, message: str) -> bool:
        self.confirmations.append(message)
        return self.confirm_answer

    def copy_to_clipboard(self, text: str) -> bool:
        if self.copy_ok:
            self.copied.append(text)
        return self.copy_ok

    def notify(self, message: str) -> None:
        self.notices.append(message)


def record_json(code: str, target_url: str, **fields) -> dict:
    """Wire-format link record."""
    data = {
        "code": code,
        "target_url": target_url,
        "total_clicks": 0,
        "last_clicked_at": None,
        "created_at": "2024-01-01T00:00:00Z",
    }
    data.update(fields)
    return data


@pytest.fixture
def prompt() -> FakePrompt:
    return FakePrompt()


@pytest.fixture
def link_store() -> LinkStore:
    return LinkStore()


@pytest.fixture
async def api_client(link_store):
    """LinkApiClient talking to the in-memory API."""
    transport = httpx.ASGITransport(app=create_fake_api(link_store))
    client = LinkApiClient(BASE_ADDRESS, transport=transport)
    yield client
    await client.aclose()


@pytest.fixture
def repository(api_client) -> LinkRepository:
    return LinkRepository(api_client)


@pytest.fixture
async def mock_client_factory():
    """
    Build LinkApiClients over httpx.MockTransport handlers.

    Usage:
        client = mock_client_factory(lambda request: httpx.Response(200, json=[]))
    """
    clients = []

    def factory(handler: Callable) -> LinkApiClient:
        client = LinkApiClient(BASE_ADDRESS, transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()


@pytest.fixture
def mock_repository(mock_client_factory):
    """Build a LinkRepository over a MockTransport handler."""
    def factory(handler: Callable) -> LinkRepository:
        return LinkRepository(mock_client_factory(handler))
    return factory
