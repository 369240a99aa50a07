import json
import logging
import time
from typing import Any, Optional

from . import config

logger = logging.getLogger(__name__)

KEY_PREFIX = "weatherdash"


def make_key(kind: str, city: str, window: Optional[int] = None) -> str:
    key = f"{KEY_PREFIX}:{kind}:{city.strip().lower()}"
    return key if window is None else f"{key}:{window}"


# ---- in-memory fallback with TTL ----
_mem_store: dict[str, tuple[float, str]] = {}


def _mem_get(key: str) -> Optional[str]:
    item = _mem_store.get(key)
    if not item:
        return None
    exp, data = item
    if exp < time.time():
        _mem_store.pop(key, None)
        return None
    return data


def _mem_set(key: str, data: str, ttl_seconds: int) -> None:
    _mem_store[key] = (time.time() + ttl_seconds, data)


def clear_memory() -> None:
    _mem_store.clear()


# ---- async redis, when REDIS_URL is set and answers PING ----
_redis = None


async def _get_redis():
    global _redis
    if _redis is not None:
        return _redis
    if not config.REDIS_URL:
        return None
    try:
        from redis import asyncio as aioredis
        client = aioredis.from_url(config.REDIS_URL, encoding="utf-8", decode_responses=True)
        await client.ping()
    except Exception as e:
        logger.warning("redis unavailable (%r), using in-memory cache", e)
        return None
    _redis = client
    return _redis


async def backend() -> str:
    return "redis" if await _get_redis() else "memory"


async def aget(key: str) -> Optional[Any]:
    """Cached JSON value for `key`, or None. Corrupt entries count as misses."""
    r = await _get_redis()
    raw = await r.get(key) if r else _mem_get(key)
    if raw is None:
        logger.debug("cache miss %s", key)
        return None
    try:
        value = json.loads(raw)
    except ValueError:
        logger.warning("dropping corrupt cache entry %s", key)
        return None
    logger.debug("cache hit %s", key)
    return value


async def aset(key: str, value: Any, ttl_seconds: int) -> None:
    data = json.dumps(value)
    r = await _get_redis()
    if r:
        await r.set(key, data, ex=ttl_seconds)
        return
    _mem_set(key, data, ttl_seconds)
