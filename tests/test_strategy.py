import queue

import pytest

from suiarb.arb_cache import ArbCache
from suiarb.strategy import ArbDispatcher, CachedEpoch, new_shio_source
from suiarb.types import PublicSource, ShioSource


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ArbCache(5.0, clock)


def test_cached_epoch_reuses_fresh_value():
    calls = []

    def fetch():
        calls.append(1)
        return len(calls)

    epoch = CachedEpoch(fetch, lambda e: False)
    assert epoch.get() == 1
    assert epoch.get() == 1
    assert len(calls) == 1


def test_cached_epoch_refetches_when_stale():
    values = iter(["first", "second", "third"])
    stale = {"first"}
    epoch = CachedEpoch(lambda: next(values), lambda e: e in stale)
    assert epoch.get() == "first"
    assert epoch.get() == "second"
    assert epoch.get() == "second"


def test_new_shio_source_moves_deadline_up():
    src = new_shio_source("digest", 100, 1000)
    assert isinstance(src, ShioSource)
    assert src.deadline == 1000 - 20
    assert src.bid_amount == 0
    assert src.arb_found == 0
    assert src.start == 100
    assert src.opp_tx_digest == "digest"


def test_on_swaps_inserts_every_coin(cache):
    d = ArbDispatcher(20, cache)
    d.on_swaps([("a", None), ("b", "pool")], "tx", "ctx", PublicSource())
    assert len(cache) == 2
    assert cache.get("a") == ("tx", "ctx")


def test_dispatch_sends_in_insertion_order(cache):
    d = ArbDispatcher(20, cache)
    d.on_swaps([("a", None)], "tx1", "ctx", PublicSource())
    d.on_swaps([("b", "pool")], "tx2", "ctx", PublicSource())
    q = queue.Queue()
    sent = d.dispatch(q)
    assert [i.coin for i in sent] == ["a", "b"]
    assert q.get_nowait().coin == "a"
    assert q.get_nowait().pool_id == "pool"
    assert d.recent() == ["a", "b"]


def test_dispatch_respects_channel_limit(cache):
    d = ArbDispatcher(20, cache, channel_limit=2)
    d.on_swaps([("a", None), ("b", None), ("c", None)], "tx", "ctx", PublicSource())
    q = queue.Queue()
    q.put_nowait("busy")
    sent = d.dispatch(q)
    assert len(sent) == 1
    assert len(cache) == 2


def test_dispatch_with_full_queue_sends_nothing(cache):
    d = ArbDispatcher(20, cache, channel_limit=1)
    d.on_swaps([("a", None)], "tx", "ctx", PublicSource())
    q = queue.Queue()
    q.put_nowait("busy")
    assert d.dispatch(q) == []
    assert len(cache) == 1


def test_recent_public_coin_is_skipped(cache):
    d = ArbDispatcher(20, cache)
    d.on_swaps([("a", None)], "tx1", "ctx", PublicSource())
    d.dispatch(queue.Queue())
    d.on_swaps([("a", None)], "tx2", "ctx", PublicSource())
    q = queue.Queue()
    assert d.dispatch(q) == []
    assert q.empty()
    assert len(cache) == 0


def test_recent_shio_coin_is_still_sent(cache):
    d = ArbDispatcher(20, cache)
    src = new_shio_source("opp", 0, 1000)
    d.on_swaps([("a", None)], "tx1", "ctx", src)
    d.dispatch(queue.Queue())
    d.on_swaps([("a", None)], "tx2", "ctx", src)
    sent = d.dispatch(queue.Queue())
    assert [i.tx_digest for i in sent] == ["tx2"]
    assert d.recent() == ["a", "a"]


def test_recent_list_is_capped(cache):
    d = ArbDispatcher(2, cache)
    d.on_swaps([("a", None), ("b", None), ("c", None)], "tx", "ctx", PublicSource())
    d.dispatch(queue.Queue())
    assert d.recent() == ["b", "c"]


def test_expired_coin_leaves_recent_list(clock, cache):
    d = ArbDispatcher(20, cache, channel_limit=1)
    d.on_swaps([("a", None)], "tx1", "ctx", PublicSource())
    d.dispatch(queue.Queue())
    assert d.recent() == ["a"]

    d.on_swaps([("a", None)], "tx2", "ctx", PublicSource())
    full = queue.Queue()
    full.put_nowait("busy")
    clock.now = 10.0
    assert d.dispatch(full) == []
    assert d.recent() == []
    assert len(cache) == 0