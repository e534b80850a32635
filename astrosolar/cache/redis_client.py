"""
Redis client for caching upstream NASA POWER payloads.

Caching is best-effort: connection failures and undecodable entries are
logged but never propagate, so a missing or unhealthy Redis only costs an
extra upstream request.

CHANGELOG:
- 2026-10-18: Replace device cache invalidation with JSON get/set helpers
- 2026-10-18: Initial creation
"""

import json
import logging
from typing import Any

import redis.asyncio as redis

logger = logging.getLogger(__name__)


def power_cache_key(
    latitude: float,
    longitude: float,
    start: str,
    end: str,
) -> str:
    """Build the cache key for a NASA POWER point request.

    Coordinates are rounded to 4 decimals (about 11 m) so that map clicks
    on the same spot share an entry.
    """
    return f"nasa-power:{latitude:.4f}:{longitude:.4f}:{start}:{end}"


async def get_redis(url: str) -> redis.Redis:
    """Create and return an async Redis client for *url*.

    Returns:
        redis.Redis: Async Redis client.
    """
    return redis.from_url(url)


async def get_cached_json(url: str, key: str) -> Any | None:
    """Return the decoded JSON value stored under *key*, or None.

    None is returned on a cache miss, on any Redis failure and for entries
    that are not valid JSON.
    """
    try:
        client = await get_redis(url)
        try:
            cached = await client.get(key)
        finally:
            await client.aclose()
    except Exception:
        logger.warning("Redis read failed for key %s", key, exc_info=True)
        return None

    if cached is None:
        return None
    try:
        return json.loads(cached)
    except ValueError:
        logger.warning("Discarding undecodable cache entry %s", key)
        return None


async def set_cached_json(url: str, key: str, value: Any, ttl_s: int) -> None:
    """Store *value* as JSON under *key* with a TTL of *ttl_s* seconds.

    A TTL of 0 skips the write.
    """
    if ttl_s <= 0:
        return
    try:
        client = await get_redis(url)
        try:
            await client.set(key, json.dumps(value), ex=ttl_s)
        finally:
            await client.aclose()
    except Exception:
        logger.warning("Redis write failed for key %s", key, exc_info=True)
