"""Tests for the TTL cache."""

from matriculas_scraper.core.cache import TTLCache


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestTTLCache:
    """Tests for TTLCache class."""

    def test_set_and_get(self):
        cache = TTLCache(ttl=60, clock=FakeClock())
        cache.set("matriculas", [1, 2])

        assert cache.get("matriculas") == [1, 2]

    def test_missing_key(self):
        assert TTLCache().get("missing") is None

    def test_expiry(self):
        clock = FakeClock()
        cache = TTLCache(ttl=60, clock=clock)
        cache.set("matriculas", [1])

        clock.now += 59
        assert cache.get("matriculas") == [1]

        clock.now += 2
        assert cache.get("matriculas") is None
        assert len(cache) == 0

    def test_per_entry_ttl(self):
        clock = FakeClock()
        cache = TTLCache(ttl=60, clock=clock)
        cache.set("short", "x", ttl=1)

        clock.now += 5
        assert cache.get("short") is None

    def test_empty_value_is_cached(self):
        """Test that an empty result is a hit, not a miss."""
        cache = TTLCache(ttl=60, clock=FakeClock())
        cache.set("matriculas", [])

        assert cache.get("matriculas") == []
        assert "matriculas" in cache

    def test_zero_ttl_never_hits(self):
        cache = TTLCache(ttl=0, clock=FakeClock())
        cache.set("matriculas", [1])

        assert cache.get("matriculas") is None

    def test_delete_and_clear(self):
        cache = TTLCache(ttl=60, clock=FakeClock())
        cache.set("a", 1)
        cache.set("b", 2)

        cache.delete("a")
        assert "a" not in cache

        cache.clear()
        assert len(cache) == 0
