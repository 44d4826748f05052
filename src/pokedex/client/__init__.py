"""HTTP client module for pokedex.

Provides :class:`PokeAPIClient`, a blocking client backed by
:class:`httpx.Client` that fronts every GET with an
:class:`~pokedex.cache.ExpiringCache`.

Example::

    from pokedex.client import PokeAPIClient

    with PokeAPIClient(cache_ttl=300) as client:
        pikachu = client.get_pokemon("pikachu")
"""

from pokedex.client.api_client import PokeAPIClient

__all__ = ["PokeAPIClient"]
