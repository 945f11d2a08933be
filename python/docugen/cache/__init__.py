"""Redis caching module."""

from docugen.cache.redis import RedisCache, get_redis_cache

__all__ = ["RedisCache", "get_redis_cache"]
