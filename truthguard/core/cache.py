"""
Redis-backed key/value cache for lookup outcomes.

Keys are namespaced with CACHE_PREFIX so several deployments can share one
Redis database. Every operation degrades to a no-op when caching is disabled
or Redis is unreachable; a cache problem never fails a verification.
"""

import logging
from typing import Any, Dict, Optional

from redis import Redis
from redis.exceptions import RedisError

from truthguard.core.config import config

logger = logging.getLogger(__name__)

redis_client: Optional[Redis] = Redis.from_url(config.REDIS_URL) if config.CACHE_ENABLED else None

STAT_FIELDS = ("used_memory_human", "keyspace_hits", "keyspace_misses", "connected_clients", "uptime_in_seconds")


def _namespaced(key: str) -> str:
    return f"{config.CACHE_PREFIX}:{key}" if config.CACHE_PREFIX else key


def init_global_cache() -> None:
    """Pings Redis once at startup; an unreachable server turns caching off for the process."""
    global redis_client
    if redis_client is None:
        logger.info("Outcome cache disabled (CACHE_ENABLED is false).")
        return

    try:
        redis_client.ping()
    except (RedisError, OSError) as e:
        logger.error(f"Redis at {config.REDIS_URL} is unreachable, disabling the outcome cache: {e}")
        redis_client = None
        return
    logger.info(f"Outcome cache connected to {config.REDIS_URL}")


def cache_get(key: str) -> Optional[bytes]:
    if redis_client is None:
        return None
    try:
        value = redis_client.get(_namespaced(key))
    except (RedisError, OSError) as e:
        logger.error(f"Cache read failed for {key}: {e}")
        return None
    logger.debug(f"Cache {'hit' if value is not None else 'miss'} for {key}")
    return value


def cache_set(key: str, value: Any, ttl: int = config.CACHE_TTL) -> None:
    if redis_client is None:
        return
    try:
        redis_client.set(name=_namespaced(key), value=value, ex=ttl)
    except (RedisError, OSError) as e:
        logger.error(f"Cache write failed for {key}: {e}")


def cache_delete(key: str) -> bool:
    """Evicts one entry; returns whether anything was removed."""
    if redis_client is None:
        return False
    try:
        removed = redis_client.delete(_namespaced(key))
    except (RedisError, OSError) as e:
        logger.error(f"Cache eviction failed for {key}: {e}")
        return False
    if removed:
        logger.info(f"Evicted cache entry {key}")
    return bool(removed)


def cache_stats() -> Optional[Dict[str, Any]]:
    """Server statistics for the health endpoint, or None when the cache is off."""
    if redis_client is None:
        return None
    try:
        info = redis_client.info()
    except (RedisError, OSError) as e:
        logger.error(f"Could not read Redis statistics: {e}")
        return None
    stats: Dict[str, Any] = {field: info.get(field) for field in STAT_FIELDS}
    stats["prefix"] = config.CACHE_PREFIX
    return stats
