"""Shared test fixtures for pokedex.

Provides a hand-driven clock for cache tests, a mock PokeAPI served through
:class:`httpx.MockTransport`, isolated config directories, and output
managers that write plain text so tests can assert on captured streams.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from pokedex.cache import ExpiringCache
from pokedex.client import PokeAPIClient
from pokedex.output import OutputFormat, OutputManager, reset_output, set_output

BASE_URL = "https://pokeapi.test/api/v2"
FIRST_PAGE_URL = f"{BASE_URL}/location/"
SECOND_PAGE_URL = f"{BASE_URL}/location/?offset=20&limit=20"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The manager keeps references to the streams that were current when it
    was created; CliRunner and capsys swap those streams per test.
    """
    yield
    reset_output()


@pytest.fixture
def plain_output() -> OutputManager:
    """Install a plain, colourless, verbose output manager."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


class FakeClock:
    """A monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def manual_cache(clock: FakeClock) -> ExpiringCache:
    """A 60 s cache without a reaper thread; sweeps happen via ``reap()``."""
    cache = ExpiringCache(60, clock=clock, start_reaper=False)
    yield cache
    cache.close()


# ---------------------------------------------------------------------------
# Mock PokeAPI
# ---------------------------------------------------------------------------


def _named(name: str, kind: str) -> dict[str, str]:
    return {"name": name, "url": f"{BASE_URL}/{kind}/{name}/"}


LOCATION_PAGES: dict[str, dict[str, Any]] = {
    FIRST_PAGE_URL: {
        "count": 40,
        "next": SECOND_PAGE_URL,
        "previous": None,
        "results": [_named("canalave-city", "location"), _named("eterna-city", "location")],
    },
    SECOND_PAGE_URL: {
        "count": 40,
        "next": None,
        "previous": FIRST_PAGE_URL,
        "results": [_named("pastoria-city", "location"), _named("sunyshore-city", "location")],
    },
}

LOCATIONS: dict[str, dict[str, Any]] = {
    "canalave-city": {
        "id": 1,
        "name": "canalave-city",
        "areas": [_named("canalave-city-area", "location-area")],
        "region": _named("sinnoh", "region"),
        "game_indices": [{"game_index": 7, "generation": _named("generation-iv", "generation")}],
        "names": [{"name": "Canalave City", "language": _named("en", "language")}],
    },
}

POKEMON: dict[str, dict[str, Any]] = {
    "pikachu": {
        "id": 25,
        "name": "pikachu",
        "base_experience": 112,
        "height": 4,
        "weight": 60,
        "stats": [
            {"base_stat": 35, "effort": 0, "stat": _named("hp", "stat")},
            {"base_stat": 55, "effort": 0, "stat": _named("attack", "stat")},
        ],
        "types": [{"slot": 1, "type": _named("electric", "type")}],
        "abilities": [],
        "moves": [],
    },
    "mew": {
        "id": 151,
        "name": "mew",
        "base_experience": None,
        "height": 4,
        "weight": 40,
        "stats": [],
        "types": [{"slot": 1, "type": _named("psychic", "type")}],
    },
}


class MockPokeAPI:
    """Routes requests by full URL and records every URL that hit the network."""

    def __init__(self) -> None:
        self.requests: list[str] = []
        self.routes: dict[str, bytes | Callable[[httpx.Request], httpx.Response]] = {}
        for url, page in LOCATION_PAGES.items():
            self.routes[url] = _json(page)
        for name, location in LOCATIONS.items():
            self.routes[f"{BASE_URL}/location/{name}"] = _json(location)
        for name, pokemon in POKEMON.items():
            self.routes[f"{BASE_URL}/pokemon/{name}"] = _json(pokemon)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        route = self.routes.get(url)
        if route is None:
            return httpx.Response(404, content=b"Not Found")
        if callable(route):
            return route(request)
        return httpx.Response(200, headers={"content-type": "application/json"}, content=route)


def _json(data: Any) -> bytes:
    return json.dumps(data).encode()


@pytest.fixture
def mock_api() -> MockPokeAPI:
    return MockPokeAPI()


@pytest.fixture
def api_client(mock_api: MockPokeAPI, manual_cache: ExpiringCache) -> PokeAPIClient:
    """A PokeAPIClient wired to :class:`MockPokeAPI` and the manual cache."""
    client = PokeAPIClient(base_url=BASE_URL, cache=manual_cache)
    with client:
        client._client.close()
        client._client = httpx.Client(
            transport=httpx.MockTransport(mock_api), follow_redirects=True
        )
        yield client


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Point XDG directories into tmp_path and clear POKEDEX_* variables."""
    monkeypatch.setattr("pokedex.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["POKEDEX_BASE_URL", "POKEDEX_CACHE_TTL", "POKEDEX_TIMEOUT", "NO_COLOR"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
