"""Caching PokeAPI client.

This module provides :class:`PokeAPIClient`, the blocking HTTP client used by
the REPL commands. It wraps :class:`httpx.Client` and layers on:

- **Response caching** -- raw response bodies are stored in an
  :class:`~pokedex.cache.ExpiringCache` keyed by the full request URL.
  Storing bytes rather than decoded records lets every record shape share
  one cache.
- **Error mapping** -- transport failures, HTTP statuses >= 400, and
  undecodable bodies become typed :mod:`pokedex.exceptions`.

Every call is a single attempt; there is no retry.
"""

from __future__ import annotations

from typing import Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from pokedex.cache import ExpiringCache
from pokedex.exceptions import ConnectionError_, DecodeError, NotFoundError, ServerError
from pokedex.models import DEFAULT_BASE_URL, Location, LocationAreaList, Pokemon
from pokedex.output import get_output

RecordT = TypeVar("RecordT", bound=BaseModel)

DEFAULT_TIMEOUT = 60.0
DEFAULT_CACHE_TTL = 3600.0


class PokeAPIClient:
    """Synchronous PokeAPI client with an in-memory response cache.

    The cache is created together with the client and lives as long as it
    does. The HTTP transport is opened on ``__enter__`` and closed, together
    with the cache's reaper, on ``__exit__``.

    Args:
        base_url: API root, e.g. ``https://pokeapi.co/api/v2``.
        cache_ttl: Cache time-to-live (and sweep period) in seconds.
        timeout: Overall timeout for each HTTP request in seconds.
        cache: Optional pre-built cache, mainly for tests. When given,
            *cache_ttl* is ignored.

    Example::

        with PokeAPIClient() as client:
            page = client.list_location_areas()
            nxt = client.list_location_areas(page.next)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        cache_ttl: float = DEFAULT_CACHE_TTL,
        timeout: float = DEFAULT_TIMEOUT,
        cache: Optional[ExpiringCache] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._cache = cache if cache is not None else ExpiringCache(cache_ttl)
        self._client: Optional[httpx.Client] = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def cache(self) -> ExpiringCache:
        """The response cache owned by this client."""
        return self._cache

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> PokeAPIClient:
        self._client = httpx.Client(
            timeout=self._timeout,
            follow_redirects=True,
            headers={"Accept": "application/json"},
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None
        self._cache.close()

    # ------------------------------------------------------------------ #
    # Endpoints
    # ------------------------------------------------------------------ #

    def list_location_areas(self, page_url: Optional[str] = None) -> LocationAreaList:
        """Fetch one page of the location listing.

        Args:
            page_url: A ``next``/``previous`` cursor from an earlier page,
                used verbatim. ``None`` fetches the first page.
        """
        url = page_url if page_url is not None else f"{self._base_url}/location/"
        return self._fetch(url, LocationAreaList)

    def get_location(self, name: str) -> Location:
        """Fetch a single location by name or numeric id."""
        return self._fetch(f"{self._base_url}/location/{name}", Location)

    def get_pokemon(self, name: str) -> Pokemon:
        """Fetch a single Pokemon by name or numeric id."""
        return self._fetch(f"{self._base_url}/pokemon/{name}", Pokemon)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _fetch(self, url: str, model: type[RecordT]) -> RecordT:
        """Return *url* decoded as *model*, consulting the cache first.

        On a hit the cached bytes are decoded; a corrupt entry raises
        :class:`DecodeError` and is not re-fetched. On a miss the body is
        fetched, decoded, and only then added to the cache.

        Raises:
            ConnectionError_: On network / timeout errors.
            NotFoundError: On 404.
            ServerError: On any other status >= 400.
            DecodeError: When the body does not match *model*.
        """
        output = get_output()

        data, found = self._cache.get(url)
        if found:
            output.debug(f"Cache hit: {url}")
            return _decode(data, model, url)

        output.debug(f"Cache miss: GET {url}")
        body = self._get(url)
        record = _decode(body, model, url)
        self._cache.add(url, body)
        return record

    def _get(self, url: str) -> bytes:
        """Issue one GET for *url* and return the raw body."""
        assert self._client is not None, "Client not initialised -- use as context manager"

        try:
            response = self._client.get(url)
        except httpx.TimeoutException as exc:
            raise ConnectionError_(f"Request timed out after {self._timeout:g}s: {url}") from exc
        except httpx.TransportError as exc:
            raise ConnectionError_(f"Connection failed: {exc}") from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            # Redirect loops and malformed cursor URLs.
            raise ConnectionError_(f"Request failed: {exc}") from exc

        status = response.status_code
        if status == 404:
            raise NotFoundError(f"HTTP 404: nothing found at {url}")
        if status >= 400:
            raise ServerError(f"HTTP {status}: bad status code from {url}")
        return response.content


def _decode(data: Optional[bytes], model: type[RecordT], url: str) -> RecordT:
    try:
        return model.model_validate_json(data or b"")
    except ValidationError as exc:
        raise DecodeError(
            f"Could not decode {model.__name__} from {url}: {exc.error_count()} error(s)"
        ) from exc
