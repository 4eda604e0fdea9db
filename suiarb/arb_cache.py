"""A keyed queue of arbitrage candidates with de-duplication and timed expiry."""

from __future__ import annotations

import heapq
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from .types import Source


@dataclass
class ArbItem:
    """A candidate handed to a worker."""

    coin: str
    pool_id: Optional[str]
    tx_digest: str
    sim_ctx: Any
    source: Source


@dataclass
class _Entry:
    digest: str
    sim_ctx: Any
    generation: int
    expires_at: float
    source: Source


class ArbCache:
    """Holds one entry per coin, ordered by expiry; reinserting a coin refreshes it."""

    def __init__(self, expiration: float = 5.0, clock: Callable[[], float] = time.monotonic):
        self._expiration = expiration
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}
        self._heap: List[Tuple[float, int, str, Optional[str]]] = []
        self._generation = 0

    def insert(self, coin: str, pool_id: Optional[str], digest: str, sim_ctx: Any, source: Source) -> None:
        """Insert a coin, or replace its entry with a fresh generation and expiry."""
        self._generation += 1
        expires_at = self._clock() + self._expiration
        self._entries[coin] = _Entry(digest, sim_ctx, self._generation, expires_at, source)
        heapq.heappush(self._heap, (expires_at, self._generation, coin, pool_id))

    def get(self, coin: str) -> Optional[Tuple[str, Any]]:
        """Return ``(digest, sim_ctx)`` for a coin, or None."""
        entry = self._entries.get(coin)
        if entry is None:
            return None
        return entry.digest, entry.sim_ctx

    def remove_expired(self) -> List[str]:
        """Drop expired entries and return their coins, earliest first."""
        expired: List[str] = []
        now = self._clock()
        while self._heap:
            _, generation, coin, _ = self._heap[0]
            entry = self._entries.get(coin)
            if entry is None or entry.generation != generation:
                heapq.heappop(self._heap)
                continue
            if entry.expires_at > now:
                break
            expired.append(coin)
            del self._entries[coin]
            heapq.heappop(self._heap)
        return expired

    def pop_one(self) -> Optional[ArbItem]:
        """Remove and return the live entry that expires first, or None."""
        now = self._clock()
        while self._heap:
            _, generation, coin, pool_id = heapq.heappop(self._heap)
            entry = self._entries.get(coin)
            if entry is None or entry.generation != generation:
                continue
            del self._entries[coin]
            if entry.expires_at > now:
                return ArbItem(coin, pool_id, entry.digest, entry.sim_ctx, entry.source)
        return None

    def __len__(self) -> int:
        return len(self._entries)