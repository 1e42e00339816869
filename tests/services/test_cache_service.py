"""Tests for the Redis-backed geolocation cache."""
import json

import pytest
import redis

from conftest import GOOGLE_PAYLOAD, FakeRedis
from core.lookup_types import Classification, LookupResult
from services import cache_service
from services.cache_service import CacheUnavailableError, GeoCache


def _google(address: str = "8.8.8.8") -> LookupResult:
    return LookupResult.fresh(address).merge_api_payload(GOOGLE_PAYLOAD).with_changes(located=True)


def test_set_then_get_round_trip(fake_redis):
    cache = GeoCache(fake_redis, ttl_minutes=1)
    record = _google()

    assert cache.set(record) is True
    cached, found = cache.get("8.8.8.8")

    assert found is True
    assert cached.descriptive_fields() == record.descriptive_fields()
    assert cached.classification is Classification.CACHE_HIT


def test_set_uses_ttl_in_seconds(fake_redis):
    cache = GeoCache(fake_redis, ttl_minutes=129600)
    cache.set(_google())
    assert fake_redis.ttls["8.8.8.8"] == 129600 * 60

    cache.set(_google(), ttl_minutes=2)
    assert fake_redis.ttls["8.8.8.8"] == 120


def test_stored_snapshot_is_tagged_resolved(fake_redis):
    GeoCache(fake_redis).set(_google().with_changes(classification=Classification.CACHE_MISS))
    stored = json.loads(fake_redis.store["8.8.8.8"])
    assert stored["ip_class"] == "resolved"
    assert stored["ip"] == "8.8.8.8"


def test_get_miss(fake_redis):
    assert GeoCache(fake_redis).get("1.1.1.1") == (None, False)


def test_get_backend_error_is_a_miss(fake_redis, redis_timeout):
    fake_redis.fail_with = redis_timeout
    assert GeoCache(fake_redis).get("8.8.8.8") == (None, False)


def test_get_undecodable_entry_is_a_miss(fake_redis):
    fake_redis.store["8.8.8.8"] = b"{broken"
    assert GeoCache(fake_redis).get("8.8.8.8") == (None, False)


def test_get_sentinel_country_is_a_miss(fake_redis):
    fake_redis.store["8.8.8.8"] = LookupResult.fresh("8.8.8.8").with_changes(isp="Google LLC").to_json().encode()
    assert GeoCache(fake_redis).get("8.8.8.8") == (None, False)


def test_set_backend_error_returns_false(fake_redis):
    fake_redis.fail_with = redis.exceptions.ConnectionError("gone")
    assert GeoCache(fake_redis).set(_google()) is False


def test_connect_pings_backend(monkeypatch):
    created = {}

    def fake_client(**kwargs):
        created.update(kwargs)
        return FakeRedis()

    monkeypatch.setattr(cache_service.redis, "Redis", fake_client)
    cache = GeoCache.connect("cache.internal:6380", db=2, socket_timeout=1.5, ttl_minutes=5)

    assert created["host"] == "cache.internal"
    assert created["port"] == 6380
    assert created["db"] == 2
    assert created["socket_timeout"] == 1.5
    assert cache.ttl_minutes == 5


def test_connect_defaults_port(monkeypatch):
    created = {}

    def fake_client(**kwargs):
        created.update(kwargs)
        return FakeRedis()

    monkeypatch.setattr(cache_service.redis, "Redis", fake_client)
    GeoCache.connect("localhost")
    assert created["host"] == "localhost"
    assert created["port"] == 6379


def test_connect_fails_fast_when_unreachable(monkeypatch):
    client = FakeRedis()
    client.fail_with = redis.exceptions.ConnectionError("Connection refused")
    monkeypatch.setattr(cache_service.redis, "Redis", lambda **kwargs: client)

    with pytest.raises(CacheUnavailableError, match="Connection refused"):
        GeoCache.connect("127.0.0.1:6379")


def test_connect_rejects_bad_port():
    with pytest.raises(CacheUnavailableError):
        GeoCache.connect("127.0.0.1:redis")
