import fakeredis
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from admin_core.container import build_cache
from admin_core.db import schemas
from admin_core.errors import BackendError
from admin_core.utils.cache import InMemoryTagCache, RedisTagCache, cached
from admin_core.utils.settings import DatabaseType, Settings


@pytest.fixture
def redis_client():
    client = fakeredis.FakeRedis()
    yield client
    client.flushall()


@pytest.fixture
def redis_cache(redis_client):
    return RedisTagCache(redis_client, default_ttl=60, key_prefix="test:")


class BrokenRedis:
    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise RedisConnectionError("connection refused")
        return fail


def test_values_round_trip_as_entities(redis_cache):
    summary = schemas.LanguageSummary(public_id="p-1", name="English")
    redis_cache.set("languages:front", [summary], tags=["languages"])

    assert redis_cache.get("languages:front") == [summary]
    assert redis_cache.get("missing", "fallback") == "fallback"


def test_entries_are_written_with_the_ttl(redis_cache, redis_client):
    redis_cache.set("k", 1)
    redis_cache.set("short", 2, ttl=5)

    assert 0 < redis_client.ttl("test:entry:k") <= 60
    assert 0 < redis_client.ttl("test:entry:short") <= 5


def test_invalidate_tag_drops_every_tagged_key(redis_cache):
    redis_cache.set("languages:front", [1], tags=["languages"])
    redis_cache.set("languages:all", [2], tags=["languages"])
    redis_cache.set("currencies:public", [3], tags=["currencies"])

    assert redis_cache.invalidate_tag("languages") == 2
    assert redis_cache.get("languages:front") is None
    assert redis_cache.get("languages:all") is None
    assert redis_cache.get("currencies:public") == [3]
    assert redis_cache.invalidate_tag("languages") == 0


def test_two_processes_share_entries(redis_client):
    writer = RedisTagCache(redis_client, key_prefix="shared:")
    reader = RedisTagCache(redis_client, key_prefix="shared:")

    cached(writer, "sliders:en:active", lambda: ["slide"], tags=["sliders"])
    assert cached(reader, "sliders:en:active", lambda: ["fresh"], tags=["sliders"]) == ["slide"]

    reader.invalidate_tag("sliders")
    assert writer.get("sliders:en:active") is None


def test_clear_only_touches_its_prefix(redis_cache, redis_client):
    redis_client.set("other:key", b"keep")
    redis_cache.set("k", 1, tags=["t"])

    redis_cache.clear()

    assert redis_cache.get("k") is None
    assert redis_client.get("other:key") == b"keep"


def test_read_and_write_failures_are_cache_misses():
    cache = RedisTagCache(BrokenRedis())

    cache.set("k", 1)
    assert cache.get("k", "miss") == "miss"
    assert cached(cache, "k", lambda: "loaded") == "loaded"


def test_failed_invalidation_raises():
    with pytest.raises(BackendError):
        RedisTagCache(BrokenRedis()).invalidate_tag("languages")


def test_build_cache_follows_settings(monkeypatch):
    memory = build_cache(Settings(database_type=DatabaseType.POSTGRES))
    assert isinstance(memory, InMemoryTagCache)

    monkeypatch.setattr(
        "admin_core.utils.cache.redis.from_url", lambda url, **kwargs: fakeredis.FakeRedis()
    )
    settings = Settings(database_type=DatabaseType.POSTGRES, cache_backend="redis", redis_url="redis://cache:6379/0")
    assert isinstance(build_cache(settings), RedisTagCache)
