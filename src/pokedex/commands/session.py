"""Mutable per-session state shared by every REPL command."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

from pokedex.client import PokeAPIClient
from pokedex.models import Pokemon


@dataclass
class Session:
    """State carried from one command to the next.

    Attributes:
        client: The caching API client. Its cache lives as long as the
            session.
        next_location_url: Cursor for ``map``; ``None`` means "first page"
            before any listing was fetched, or "no more pages" after the
            last one.
        previous_location_url: Cursor for ``mapb``; ``None`` means the
            current page is the first.
        caught: Caught Pokemon keyed by the name used in ``catch``.
        rng: Random source for the catch mechanic.
    """

    client: PokeAPIClient
    next_location_url: Optional[str] = None
    previous_location_url: Optional[str] = None
    caught: dict[str, Pokemon] = field(default_factory=dict)
    rng: random.Random = field(default_factory=random.Random)
