"""Pytest configuration and shared fixtures."""

from typing import Any, Callable, Dict

import pytest
from fastapi.testclient import TestClient

from exchange_api.app.core.config import Settings
from exchange_api.app.core.storage import ExchangeStore
from exchange_api.app.main import create_app
from exchange_api.app.schemas.entry import Entry, Stage, Vote
from exchange_api.app.schemas.exchange import Exchange


@pytest.fixture
def make_entry() -> Callable[..., Entry]:
    """Build an entry from its stories: ``make_entry("A", "B")``."""

    def _make(*stories: str) -> Entry:
        return Entry(stories=stories)

    return _make


@pytest.fixture
def make_vote(make_entry) -> Callable[..., Vote]:
    """Build a vote: ``make_vote(1, "A", "B")``."""

    def _make(priority: int, *stories: str) -> Vote:
        return Vote(priority=priority, entry=make_entry(*stories))

    return _make


@pytest.fixture
def make_exchange() -> Callable[..., Exchange]:
    """Build an exchange record with sensible defaults."""

    def _make(**overrides: Any) -> Exchange:
        data: Dict[str, Any] = {
            "title": "Books",
            "id": 1,
            "secret": "RarityBoopsDerpy",
            "stage": Stage.SUBMISSION,
        }
        data.update(overrides)
        return Exchange(**data)

    return _make


@pytest.fixture
def app_settings(tmp_path) -> Settings:
    return Settings(exchanges_dir=str(tmp_path / "exchanges"), log_level="WARNING")


@pytest.fixture
def store(tmp_path) -> ExchangeStore:
    store = ExchangeStore(tmp_path / "exchanges")
    store.load()
    return store


@pytest.fixture
def client(app_settings):
    """Test client for an app storing exchanges in a temporary directory."""
    app = create_app(app_settings)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def create_exchange(client) -> Callable[..., Dict[str, Any]]:
    """Create an exchange through the API and return the full record."""

    def _create(title: str = "Books", **extra: Any) -> Dict[str, Any]:
        response = client.post("/api/v1/exchanges/", json={"title": title, **extra})
        assert response.status_code == 201, response.text
        return response.json()

    return _create


def auth(secret: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {secret}"}


@pytest.fixture
def auth_header() -> Callable[[str], Dict[str, str]]:
    return auth
