"""Shared pytest fixtures."""

import asyncio
from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx
import pytest

from cinefind.config import Config
from cinefind.core.core import Core
from cinefind.core.storage import MemoryStorage

BATMAN_SEARCH = {
    "Search": [
        {"Title": "Batman Begins", "Year": "2005", "imdbID": "tt0372784", "Type": "movie", "Poster": "N/A"},
        {"Title": "The Batman", "Year": "2022", "imdbID": "tt1877830", "Type": "movie", "Poster": "N/A"},
    ],
    "totalResults": "2",
    "Response": "True",
}

BATMAN_BEGINS = {
    "Title": "Batman Begins",
    "Year": "2005",
    "imdbID": "tt0372784",
    "Type": "movie",
    "Plot": "After witnessing his parents' death, Bruce learns the art of fighting to confront injustice.",
    "Poster": "https://m.media-amazon.com/images/batman-begins.jpg",
    "Response": "True",
}


class FakeOmdb:
    """Stands in for omdbapi.com behind an httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.search_payload: dict[str, Any] = BATMAN_SEARCH
        self.details_payload: dict[str, Any] = BATMAN_BEGINS

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        # Yield like a real network round trip
        await asyncio.sleep(0)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"Response": "False", "Error": "Invalid API key!"})
        if "i" in request.url.params:
            return httpx.Response(200, json=self.details_payload)
        return httpx.Response(200, json=self.search_payload)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class FrozenClock:
    """Replaces the modules' ``now`` with a controllable clock."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock(monkeypatch):
    """Freeze time for tokens and the movie cache."""
    frozen = FrozenClock(datetime(2024, 6, 1, 12, 0, tzinfo=UTC))
    monkeypatch.setattr("cinefind.core.modules.session.tokens.now", frozen)
    monkeypatch.setattr("cinefind.core.modules.movie.service.now", frozen)
    return frozen


@pytest.fixture
def config():
    """Fast, deterministic configuration."""
    return Config(
        _env_file=None,
        omdb_api_key="test-key",
        omdb_base_url="https://omdb.test/",
        token_secret="test-secret",
        auth_delay_seconds=0,
        bcrypt_rounds=4,
    )


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def omdb():
    return FakeOmdb()


@pytest.fixture
async def core(config, storage, omdb) -> AsyncGenerator[Core]:
    """Started Core wired to memory storage and the fake OMDB."""
    core = Core(config, storage=storage, transport=omdb.transport())
    async with core.lifespan():
        yield core
