"""In-memory response caching for pokedex.

This package provides :class:`ExpiringCache`, a thread-safe mapping from
request URL to raw response bytes with a fixed time-to-live and a
background reaper thread.

The cache is owned by :class:`~pokedex.client.PokeAPIClient` and its TTL
comes from the ``cache`` section of the configuration
(:class:`~pokedex.models.CacheConfig`).
"""

from pokedex.cache.cache import ExpiringCache

__all__ = ["ExpiringCache"]
