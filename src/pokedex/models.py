"""Canonical Pydantic models shared across all pokedex modules.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`CacheConfig`, :class:`RequestConfig`, and :class:`GlobalConfig`.

**API record models** -- decoded from PokeAPI response bodies by
:class:`~pokedex.client.PokeAPIClient`:
    :class:`NamedAPIResource`, :class:`LocationAreaList`, :class:`Location`,
    :class:`Pokemon` and their nested pieces.

Record models ignore unknown fields. The upstream payloads are large and
only a handful of fields are ever displayed, so the models declare just
those fields and let pydantic drop the rest.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"


# --- Configuration ---


class CacheConfig(BaseModel):
    """Response cache settings stored in :class:`GlobalConfig`."""

    ttl_seconds: float = Field(
        default=3600,
        gt=0,
        allow_inf_nan=False,
        description="Cache TTL in seconds; also the reaper's sweep period",
    )


class RequestConfig(BaseModel):
    """HTTP request settings applied to every API call."""

    timeout: float = Field(
        default=60, gt=0, allow_inf_nan=False, description="Request timeout in seconds"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/pokedex/config.json``.

    Loaded and saved by :func:`~pokedex.config.load_global_config` and
    :func:`~pokedex.config.save_global_config`. Fields here can be
    overridden by environment variables or CLI flags. See
    :func:`~pokedex.config.resolve_config` for the full precedence chain.
    """

    base_url: str = Field(default=DEFAULT_BASE_URL, description="PokeAPI base URL")
    cache: CacheConfig = Field(default_factory=CacheConfig)
    request: RequestConfig = Field(default_factory=RequestConfig)


# --- API records ---


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore")


class NamedAPIResource(_Record):
    """A ``{name, url}`` reference to another API resource."""

    name: str
    url: str


class LocationAreaList(_Record):
    """One page of the paginated ``/location/`` listing.

    ``next`` and ``previous`` are the server-provided cursor URLs. They are
    used verbatim as request URLs (and therefore as cache keys) when paging.
    """

    count: int = 0
    next: Optional[str] = None
    previous: Optional[str] = None
    results: list[NamedAPIResource] = Field(default_factory=list)


class GameIndex(_Record):
    game_index: int
    generation: NamedAPIResource


class LocalizedName(_Record):
    name: str
    language: NamedAPIResource


class Location(_Record):
    """Detail record for a single location, returned by ``/location/{name}``."""

    id: int
    name: str
    areas: list[NamedAPIResource] = Field(default_factory=list)
    region: Optional[NamedAPIResource] = None
    game_indices: list[GameIndex] = Field(default_factory=list)
    names: list[LocalizedName] = Field(default_factory=list)


class PokemonStat(_Record):
    base_stat: int
    effort: int = 0
    stat: NamedAPIResource


class PokemonType(_Record):
    slot: int
    type: NamedAPIResource


class Pokemon(_Record):
    """Detail record for a single Pokemon, returned by ``/pokemon/{name}``.

    ``base_experience`` is null for some entries upstream; it is normalised
    to ``0`` here so the catch mechanic never has to special-case ``None``.
    """

    id: int
    name: str
    base_experience: int = 0
    height: int = 0
    weight: int = 0
    stats: list[PokemonStat] = Field(default_factory=list)
    types: list[PokemonType] = Field(default_factory=list)

    @field_validator("base_experience", mode="before")
    @classmethod
    def _null_experience(cls, value: object) -> object:
        return 0 if value is None else value
