from unittest.mock import MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from truthguard.core import cache
from truthguard.core.config import Config


@pytest.fixture
def redis_mock():
    client = MagicMock()
    with patch.object(cache, "redis_client", client), \
         patch.object(cache, "config", Config(CACHE_PREFIX="tg")):
        yield client


def test_cache_is_a_no_op_without_redis():
    with patch.object(cache, "redis_client", None):
        assert cache.cache_get("key") is None
        cache.cache_set("key", "value")
        assert cache.cache_delete("key") is False
        assert cache.cache_stats() is None


def test_keys_are_namespaced(redis_mock):
    redis_mock.get.return_value = b"stored"
    redis_mock.delete.return_value = 1

    cache.cache_set("outcome:ndtv.com:abc", "value", ttl=30)
    assert cache.cache_get("outcome:ndtv.com:abc") == b"stored"
    assert cache.cache_delete("outcome:ndtv.com:abc") is True

    redis_mock.set.assert_called_once_with(name="tg:outcome:ndtv.com:abc", value="value", ex=30)
    redis_mock.get.assert_called_once_with("tg:outcome:ndtv.com:abc")
    redis_mock.delete.assert_called_once_with("tg:outcome:ndtv.com:abc")


def test_empty_prefix_uses_bare_keys():
    client = MagicMock()
    with patch.object(cache, "redis_client", client), patch.object(cache, "config", Config(CACHE_PREFIX="")):
        cache.cache_get("key")
    client.get.assert_called_once_with("key")


def test_delete_of_missing_key_reports_false(redis_mock):
    redis_mock.delete.return_value = 0
    assert cache.cache_delete("gone") is False


def test_cache_errors_are_treated_as_misses(redis_mock):
    redis_mock.get.side_effect = RedisConnectionError("redis down")
    redis_mock.set.side_effect = ConnectionError("redis down")
    redis_mock.delete.side_effect = RedisConnectionError("redis down")
    assert cache.cache_get("key") is None
    cache.cache_set("key", "value")
    assert cache.cache_delete("key") is False


def test_cache_stats(redis_mock):
    redis_mock.info.return_value = {"used_memory_human": "1M", "keyspace_hits": 3, "keyspace_misses": 1}
    stats = cache.cache_stats()
    assert stats["keyspace_hits"] == 3
    assert stats["connected_clients"] is None
    assert stats["prefix"] == "tg"


def test_init_disables_cache_when_unreachable():
    client = MagicMock()
    client.ping.side_effect = RedisConnectionError("refused")
    with patch.object(cache, "redis_client", client):
        cache.init_global_cache()
        assert cache.redis_client is None


def test_init_keeps_reachable_client():
    client = MagicMock()
    with patch.object(cache, "redis_client", client):
        cache.init_global_cache()
        assert cache.redis_client is client
    client.ping.assert_called_once_with()
