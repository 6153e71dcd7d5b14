import threading

import pytest

from pagelayouts.core.cache import RenderCache
from pagelayouts.core.context import FileSignature

SIG = FileSignature(mtime_ns=100, size=10, mode=0o100644)


def test_disabled_cache_never_stores():
    cache = RenderCache()
    assert not cache.enabled
    cache.put("/a", SIG, "out")
    assert cache.get("/a", SIG) == (None, False)
    assert len(cache) == 0


def test_put_then_get():
    cache = RenderCache(enabled=True)
    cache.put("/a", SIG, "out")
    assert cache.get("/a", SIG) == ("out", True)
    assert cache.get("/b", SIG) == (None, False)


def test_put_overwrites():
    cache = RenderCache(enabled=True)
    cache.put("/a", SIG, "first")
    cache.put("/a", SIG, "second")
    assert cache.get("/a", SIG) == ("second", True)
    assert len(cache) == 1


@pytest.mark.parametrize("changed", [
    FileSignature(mtime_ns=101, size=10, mode=0o100644),
    FileSignature(mtime_ns=100, size=11, mode=0o100644),
    FileSignature(mtime_ns=100, size=10, mode=0o100755),
])
def test_stale_entry_is_evicted(changed):
    cache = RenderCache(enabled=True)
    cache.put("/a", SIG, "out")
    assert cache.get("/a", changed) == (None, False)
    # evicted, so even the original signature misses now.
    assert cache.get("/a", SIG) == (None, False)
    assert cache.stats().evictions == 1


def test_enable_resets_entries():
    cache = RenderCache(enabled=True)
    cache.put("/a", SIG, "out")
    cache.enable(True)
    assert cache.get("/a", SIG) == (None, False)

    cache.put("/a", SIG, "out")
    cache.enable(False)
    assert not cache.enabled
    cache.enable(True)
    assert len(cache) == 0


def test_stats_counts_hits_and_misses():
    cache = RenderCache(enabled=True)
    cache.get("/a", SIG)
    cache.put("/a", SIG, "out")
    cache.get("/a", SIG)
    cache.get("/a", SIG)
    stats = cache.stats()
    assert (stats.hits, stats.misses, stats.entries) == (2, 1, 1)


def test_concurrent_access():
    cache = RenderCache(enabled=True)
    errors = []

    def worker(n):
        try:
            for i in range(200):
                key = f"/page-{i % 20}"
                cache.put(key, SIG, f"{key}:{n}")
                rendered, found = cache.get(key, SIG)
                assert found and rendered.startswith(key)
        except AssertionError as e:
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads: t.start()
    for t in threads: t.join()

    assert errors == []
    assert len(cache) == 20
