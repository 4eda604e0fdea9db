"""Turns swap activity into arbitrage candidates and hands them to workers."""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Deque, Generic, Iterable, List, Optional, Tuple, TypeVar

from .arb_cache import ArbCache, ArbItem
from .types import ShioSource, Source

logger = logging.getLogger(__name__)

E = TypeVar("E")

DEADLINE_MARGIN_MS = 20
DEFAULT_CHANNEL_LIMIT = 10
DEFAULT_EXPIRATION_SECONDS = 5.0


class CachedEpoch(Generic[E]):
    """Keeps the latest epoch and fetches a fresh one once it has gone stale."""

    def __init__(self, fetch: Callable[[], E], is_stale: Callable[[E], bool]):
        self._fetch = fetch
        self._is_stale = is_stale
        self._epoch: Optional[E] = None

    def get(self) -> E:
        """Return the cached epoch, refreshing it first if missing or stale."""
        if self._epoch is not None and not self._is_stale(self._epoch):
            return self._epoch
        self._epoch = None
        epoch = self._fetch()
        self._epoch = epoch
        return epoch


def new_shio_source(opp_tx_digest: str, start: int, deadline_timestamp_ms: int) -> ShioSource:
    """Build the source for an auction item, moving the deadline up to leave room for submission."""
    return ShioSource(
        opp_tx_digest=opp_tx_digest,
        bid_amount=0,
        start=start,
        arb_found=0,
        deadline=deadline_timestamp_ms - DEADLINE_MARGIN_MS,
    )


class ArbDispatcher:
    """Queues candidates per coin and feeds them to workers, skipping coins arbitraged recently."""

    def __init__(
        self,
        max_recent_arbs: int,
        cache: Optional[ArbCache] = None,
        channel_limit: int = DEFAULT_CHANNEL_LIMIT,
    ):
        self._max_recent = max_recent_arbs
        self._cache = cache if cache is not None else ArbCache(DEFAULT_EXPIRATION_SECONDS)
        self._channel_limit = channel_limit
        self._recent: Deque[str] = deque()

    def on_swaps(
        self,
        coin_pools: Iterable[Tuple[str, Optional[str]]],
        digest: str,
        sim_ctx: Any,
        source: Source,
    ) -> None:
        """Record every (coin, pool) touched by a transaction as a candidate."""
        for coin, pool_id in coin_pools:
            self._cache.insert(coin, pool_id, digest, sim_ctx, source)

    def dispatch(self, queue: Any) -> List[ArbItem]:
        """Top the worker queue up to the channel limit; return the items sent.

        ``queue`` needs ``qsize()`` and ``put_nowait()``, as ``queue.Queue`` and
        ``asyncio.Queue`` provide.
        """
        sent: List[ArbItem] = []
        pending = queue.qsize()
        if pending < self._channel_limit:
            for _ in range(self._channel_limit - pending):
                item = self._cache.pop_one()
                if item is None:
                    break
                if item.coin in self._recent and not item.source.is_shio():
                    continue
                queue.put_nowait(item)
                sent.append(item)
                self._recent.append(item.coin)
                if len(self._recent) > self._max_recent:
                    self._recent.popleft()
        else:
            logger.warning("arb_item channel stash %d", pending)

        for coin in self._cache.remove_expired():
            if coin in self._recent:
                self._recent.remove(coin)
        return sent

    def recent(self) -> List[str]:
        """Coins handed to workers recently, oldest first."""
        return list(self._recent)