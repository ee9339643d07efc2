import pytest

from extrovertidos.core.cache import TTLCache
from extrovertidos.core.cache_config import CacheNamespace
from tests.helpers.fakes import FakeClock

TTL_TABLE = {"adminStats": 30, "categories": 300, "chartData": 60}


@pytest.fixture
def ttl_cache(clock):
    return TTLCache(TTL_TABLE, default_ttl=30, clock=clock)


class TestExpiry:

    @pytest.mark.parametrize("key,ttl", [("adminStats_A", 30), ("categories", 300), ("chartData_events", 60), ("other_x", 30)])
    def test_entry_lives_until_namespace_ttl(self, ttl_cache, clock, key, ttl):
        ttl_cache.set(key, {"v": 1})

        clock.advance(ttl - 0.5)
        assert ttl_cache.get(key) == {"v": 1}

        clock.advance(0.5)
        assert ttl_cache.get(key) is None

    def test_namespace_is_text_before_first_separator(self, ttl_cache):
        assert ttl_cache.namespace_of("adminStats_user_42") == "adminStats"
        assert ttl_cache.namespace_of("categories") == "categories"
        assert ttl_cache.ttl_for("chartData_users") == 60
        assert ttl_cache.ttl_for("unknown_key") == 30

    def test_set_overwrites_and_restarts_the_clock(self, ttl_cache, clock):
        ttl_cache.set("adminStats_A", 1)
        clock.advance(20)
        ttl_cache.set("adminStats_A", 2)
        clock.advance(20)
        assert ttl_cache.get("adminStats_A") == 2

    def test_expired_entry_stays_until_purged(self, ttl_cache, clock):
        ttl_cache.set("adminStats_A", 1)
        ttl_cache.set("categories", [])
        clock.advance(31)

        assert ttl_cache.get("adminStats_A") is None
        assert len(ttl_cache) == 2
        assert "adminStats_A" not in ttl_cache

        assert ttl_cache.purge_expired() == 1
        assert len(ttl_cache) == 1
        assert ttl_cache.get("categories") == []

    def test_missing_key_is_a_miss(self, ttl_cache):
        assert ttl_cache.get("adminStats_nobody") is None


class TestInvalidation:

    def test_substring_invalidation_drops_every_admin_variant(self, ttl_cache):
        ttl_cache.set("adminStats_A", "x")
        ttl_cache.set("adminStats_B", "y")
        ttl_cache.set("categories", ["c"])

        assert ttl_cache.invalidate("adminStats") == 2

        assert ttl_cache.get("adminStats_A") is None
        assert ttl_cache.get("adminStats_B") is None
        assert ttl_cache.get("categories") == ["c"]

    def test_substring_matches_anywhere_in_the_key(self, ttl_cache):
        ttl_cache.set("chartData_events", 1)
        ttl_cache.set("chartData_users", 2)

        assert ttl_cache.invalidate("users") == 1
        assert ttl_cache.get("chartData_events") == 1

    def test_namespace_invalidation_uses_exact_namespace(self, ttl_cache):
        ttl_cache.set("adminStats_A", "x")
        ttl_cache.set("adminStats_B", "y")
        ttl_cache.set("adminStatsArchive_A", "z")

        assert ttl_cache.invalidate_namespace(CacheNamespace.ADMIN_STATS) == 2
        assert ttl_cache.get("adminStatsArchive_A") == "z"
        assert ttl_cache.invalidate_namespace("adminStats") == 0

    def test_namespace_index_follows_substring_invalidation(self, ttl_cache):
        ttl_cache.set("adminStats_A", "x")
        ttl_cache.invalidate("_A")
        ttl_cache.set("adminStats_B", "y")

        assert ttl_cache.invalidate_namespace("adminStats") == 1
        assert ttl_cache.stats()["namespaces"] == {}

    def test_clear_is_idempotent(self, ttl_cache):
        keys = ["adminStats_A", "categories", "chartData_events"]
        for key in keys:
            ttl_cache.set(key, key)

        ttl_cache.clear()
        ttl_cache.clear()

        assert all(ttl_cache.get(key) is None for key in keys)
        assert len(ttl_cache) == 0


def test_stats_counts_hits_and_misses(ttl_cache):
    ttl_cache.set("adminStats_A", 1)
    ttl_cache.get("adminStats_A")
    ttl_cache.get("adminStats_B")

    stats = ttl_cache.stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["hit_ratio"] == 0.5
    assert stats["namespaces"] == {"adminStats": 1}


def test_from_settings_uses_configured_ttls():
    clock = FakeClock()
    cache = TTLCache.from_settings(clock=clock)

    assert cache.ttl_for("adminStats_A") == 30
    assert cache.ttl_for("categories") == 300
    assert cache.ttl_for("chartData_events") == 60
