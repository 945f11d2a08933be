"""Redis cache for raw model replies."""

import hashlib

import redis.asyncio as redis
from redis.exceptions import RedisError

from docugen.config import get_settings
from docugen.logging import get_logger

logger = get_logger(__name__)

KEY_PREFIX = "docugen"


class RedisCache:
    """
    Async Redis cache of raw Gemini replies.

    Keyed by a digest of the uploaded PDF, its filename and the requested
    format, so re-uploading the same estimate skips generation. Values are
    stored as the reply text. A Redis failure is a cache miss.
    """

    def __init__(self, redis_client: redis.Redis, default_ttl: int = 3600) -> None:
        self._client = redis_client
        self._default_ttl = default_ttl
        self._connected = False

    @classmethod
    async def create(cls, redis_url: str, default_ttl: int = 3600) -> "RedisCache":
        """Connect and ping; the returned cache is disabled if the ping fails."""
        client = redis.from_url(
            redis_url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        cache = cls(client, default_ttl)
        cache._connected = await cache.ping()
        if cache._connected:
            logger.info("Redis connection established", ttl=default_ttl)
        else:
            logger.warning("Redis connection failed, replies will not be cached")
        return cache

    async def close(self) -> None:
        await self._client.aclose()
        self._connected = False
        logger.info("Redis connection closed")

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning("Redis ping failed", error=str(e))
            return False

    async def get(self, key: str) -> str | None:
        """Cached reply text, or None on a miss or error."""
        if not self._connected:
            return None

        try:
            value = await self._client.get(key)
        except RedisError as e:
            logger.warning("Cache get error", key=key, error=str(e))
            return None

        logger.debug("Cache hit" if value is not None else "Cache miss", key=key)
        return value

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        """Store reply text; returns False if nothing was written."""
        if not self._connected:
            return False

        ttl = ttl or self._default_ttl
        try:
            await self._client.setex(key, ttl, value)
        except RedisError as e:
            logger.warning("Cache set error", key=key, error=str(e))
            return False

        logger.debug("Cache set", key=key, ttl=ttl, size=len(value))
        return True

    async def delete(self, key: str) -> bool:
        if not self._connected:
            return False

        try:
            deleted = await self._client.delete(key)
        except RedisError as e:
            logger.warning("Cache delete error", key=key, error=str(e))
            return False

        logger.debug("Cache delete", key=key, deleted=bool(deleted))
        return bool(deleted)

    @staticmethod
    def hash_bytes(*parts: bytes) -> str:
        """Digest of raw inputs (PDF bytes, filename, format) for use in a key."""
        digest = hashlib.sha256()
        for part in parts:
            # Length prefix keeps ("ab", "c") and ("a", "bc") apart
            digest.update(len(part).to_bytes(8, "big"))
            digest.update(part)
        return digest.hexdigest()[:32]

    def report_key(self, digest: str) -> str:
        return f"{KEY_PREFIX}:report:{digest}"


# Process-wide instance, set up in the app lifespan
_cache_instance: RedisCache | None = None


async def init_redis_cache() -> RedisCache | None:
    """Connect the shared cache if REDIS_URL is configured."""
    global _cache_instance

    settings = get_settings()
    if not settings.redis_url:
        logger.info("Redis URL not configured, caching disabled")
        return None

    _cache_instance = await RedisCache.create(
        settings.redis_url,
        default_ttl=settings.redis_cache_ttl_seconds,
    )
    return _cache_instance if _cache_instance.is_connected else None


async def close_redis_cache() -> None:
    global _cache_instance

    if _cache_instance:
        await _cache_instance.close()
        _cache_instance = None


def get_redis_cache() -> RedisCache | None:
    """Shared cache, or None when caching is disabled."""
    return _cache_instance
