"""
Redis connection management for the response cache.
"""

from typing import Optional

import redis

from ..core import get_config, get_logger
from ..core.config_loader import RedisConfig

logger = get_logger(__name__)


def build_redis(redis_config: RedisConfig = None) -> redis.Redis:
    """
    Create a Redis client with request-level timeouts.

    A timed-out call raises instead of blocking, and the cache treats it
    as a miss.
    """
    redis_config = redis_config or get_config().redis

    logger.debug(f"Creating Redis client for {redis_config.url}")
    return redis.Redis.from_url(
        redis_config.url,
        decode_responses=True,
        socket_timeout=redis_config.socket_timeout,
        socket_connect_timeout=redis_config.socket_timeout
    )


_redis: Optional[redis.Redis] = None


def get_redis() -> redis.Redis:
    """Get the singleton Redis client."""
    global _redis
    if _redis is None:
        _redis = build_redis()
    return _redis


def close_redis() -> None:
    """Close and forget the singleton client."""
    global _redis
    if _redis is not None:
        _redis.close()
        _redis = None
