"""In-memory expiring cache for raw API response bodies.

Entries are opaque ``bytes`` keyed by request URL. Each entry records the
time it was written; a background *reaper* thread wakes once per TTL and
deletes every entry older than the TTL. Reads never look at freshness, so
an entry can be served for up to ``2 * ttl`` after it was written (up to
one TTL to go stale plus up to one TTL until the next sweep).

Every read, write, and sweep pass holds the same :class:`threading.Lock`,
so the foreground REPL and the reaper never mutate the mapping at the same
time.

The reaper ticks on a fixed schedule (``start + k * ttl``). When a sweep
overruns its period the missed boundaries are dropped rather than fired
back to back, matching a classic ticker.

See Also:
    :class:`~pokedex.client.PokeAPIClient` -- the only production consumer.
"""

from __future__ import annotations

import math
import threading
import time
import weakref
from dataclasses import dataclass
from typing import Any, Callable, Optional

# Longest single wait in the reaper loop. Event.wait overflows on very large
# timeouts, so long periods are slept in slices.
_MAX_WAIT = 86400.0


@dataclass(frozen=True)
class _CacheEntry:
    value: bytes
    created_at: float


class ExpiringCache:
    """Thread-safe ``str -> bytes`` cache with periodic TTL reclamation.

    Constructing the cache starts the reaper immediately. The reaper is a
    daemon thread that holds only a weak reference to the cache, so it stops
    on :meth:`close`, when the cache is garbage collected, or at process
    exit.

    Args:
        ttl: Time-to-live in seconds, positive and finite. Also the sweep
            period.
        clock: Monotonic time source returning seconds. Injectable for
            tests; defaults to :func:`time.monotonic`.
        start_reaper: When ``False`` no background thread is started and
            sweeps only happen through :meth:`reap`. Used by tests that
            drive the clock by hand.

    Example::

        cache = ExpiringCache(ttl=300)
        cache.add("https://pokeapi.co/api/v2/pokemon/pikachu", body)
        body, found = cache.get("https://pokeapi.co/api/v2/pokemon/pikachu")
    """

    def __init__(
        self,
        ttl: float,
        clock: Callable[[], float] = time.monotonic,
        start_reaper: bool = True,
    ) -> None:
        if not 0 < ttl < math.inf:
            raise ValueError(f"ttl must be a positive finite number, got {ttl!r}")
        self._ttl = float(ttl)
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

        if start_reaper:
            self._thread = threading.Thread(
                target=_reap_loop,
                args=(weakref.ref(self), self._stop, self._ttl, clock),
                name="pokedex-cache-reaper",
                daemon=True,
            )
            self._thread.start()
        # Stops the reaper once the cache is unreachable, even without close().
        self._finalizer = weakref.finalize(self, self._stop.set)

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    @property
    def ttl(self) -> float:
        """The time-to-live (and sweep period) in seconds."""
        return self._ttl

    def add(self, key: str, value: bytes) -> None:
        """Insert or overwrite *key*, restarting its freshness clock."""
        entry = _CacheEntry(value=value, created_at=self._clock())
        with self._lock:
            self._entries[key] = entry

    def get(self, key: str) -> tuple[Optional[bytes], bool]:
        """Return ``(value, True)`` if *key* is present, else ``(None, False)``.

        Staleness is not checked here. An entry past its TTL is still a hit
        until the next sweep removes it.
        """
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None, False
        return entry.value, True

    def reap(self) -> int:
        """Delete every entry written strictly before ``now - ttl``.

        Called once per tick by the reaper thread.

        Returns:
            The number of entries removed.
        """
        cutoff = self._clock() - self._ttl
        with self._lock:
            stale = [k for k, e in self._entries.items() if e.created_at < cutoff]
            for key in stale:
                del self._entries[key]
        return len(stale)

    def stats(self) -> dict[str, Any]:
        """Return cache statistics.

        Returns:
            A ``dict`` with ``size`` (number of entries, stale ones
            included), ``ttl_seconds``, and ``running`` (whether the reaper
            thread is alive).
        """
        with self._lock:
            size = len(self._entries)
        return {
            "size": size,
            "ttl_seconds": self._ttl,
            "running": self._thread is not None and self._thread.is_alive(),
        }

    def close(self) -> None:
        """Stop the reaper and wait for it to exit. Safe to call repeatedly."""
        self._finalizer()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()

    # ------------------------------------------------------------------ #
    # Dunder helpers
    # ------------------------------------------------------------------ #

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __enter__(self) -> ExpiringCache:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def _reap_loop(
    cache_ref: weakref.ReferenceType[ExpiringCache],
    stop: threading.Event,
    interval: float,
    clock: Callable[[], float],
) -> None:
    """Sweep *cache_ref* once per *interval* until *stop* is set.

    Only a weak reference is held between ticks so that the loop never keeps
    the cache alive on its own.
    """
    next_tick = clock() + interval
    while not stop.wait(min(max(0.0, next_tick - clock()), _MAX_WAIT)):
        if clock() < next_tick:
            continue
        cache = cache_ref()
        if cache is None:
            return
        cache.reap()
        del cache

        now = clock()
        next_tick += interval
        if next_tick <= now:
            # Overran one or more periods; skip to the next boundary.
            missed = int((now - next_tick) // interval) + 1
            next_tick += missed * interval
