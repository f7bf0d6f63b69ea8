import threading

import pytest

from app.services.cache import TTLCache


class TestTTLCache:
    def test_set_then_get_returns_value(self, clock):
        cache = TTLCache(ttl=600, clock=clock)
        cache.set("districts:GUJARAT", ["AHMEDABAD", "SURAT"])
        assert cache.get("districts:GUJARAT") == ["AHMEDABAD", "SURAT"]

    def test_missing_key_is_none(self, clock):
        assert TTLCache(ttl=600, clock=clock).get("nope") is None

    def test_entry_expires_after_ttl(self, clock):
        cache = TTLCache(ttl=600, clock=clock)
        cache.set("k", "v")

        clock.advance(599)
        assert cache.get("k") == "v"

        clock.advance(1)
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_last_set_wins(self, clock):
        cache = TTLCache(ttl=600, clock=clock)
        cache.set("k", {"n": 1})
        cache.set("k", {"n": 2})
        assert cache.get("k") == {"n": 2}

    def test_reset_restarts_the_ttl_window(self, clock):
        cache = TTLCache(ttl=10, clock=clock)
        cache.set("k", 1)
        clock.advance(8)
        cache.set("k", 2)
        clock.advance(8)
        assert cache.get("k") == 2

    def test_clear(self, clock):
        cache = TTLCache(ttl=10, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert cache.get("a") is None
        assert len(cache) == 0

    @pytest.mark.parametrize("ttl", [0, -5])
    def test_rejects_non_positive_ttl(self, ttl):
        with pytest.raises(ValueError):
            TTLCache(ttl=ttl)

    def test_concurrent_writers_never_tear_an_entry(self):
        cache = TTLCache(ttl=60)
        values = [tuple([i] * 50) for i in range(20)]
        barrier = threading.Barrier(len(values))

        def writer(value):
            barrier.wait()
            for _ in range(200):
                cache.set("shared", value)
                got = cache.get("shared")
                assert got in values

        threads = [threading.Thread(target=writer, args=(v,)) for v in values]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert cache.get("shared") in values
