"""
Recent search queries for autocomplete suggestions.

Queries are kept in a Redis sorted set scored by the time they were last
searched, trimmed to a fixed size.
"""

import re
import time
from typing import List

import redis

from ..core import get_config, get_logger
from .connection import get_redis

logger = get_logger(__name__)


def normalize_query(query: str) -> str:
    """Lowercase and collapse whitespace."""
    return re.sub(r"\s+", " ", (query or "").strip().lower())


class QueryHistory:
    """Records searched queries and suggests previous ones by prefix."""

    def __init__(self, client: redis.Redis = None, key_prefix: str = None, max_size: int = None):
        config = get_config()
        self.client = client if client is not None else get_redis()
        self.key = f"{key_prefix or config.redis.key_prefix}:queries"
        self.max_size = max_size or config.cache.history_size

    def record(self, query: str) -> None:
        """Remember a query; Redis failures are logged and ignored."""
        query = normalize_query(query)
        if not query:
            return

        try:
            pipe = self.client.pipeline()
            pipe.zadd(self.key, {query: time.time()})
            pipe.zremrangebyrank(self.key, 0, -(self.max_size + 1))
            pipe.execute()
        except redis.RedisError as e:
            logger.warning(f"Could not record query history: {e}")

    def suggest(self, prefix: str, limit: int = 5) -> List[str]:
        """
        Most recent distinct queries starting with prefix.

        Args:
            prefix: Typed text; empty returns the latest queries.
            limit: Maximum suggestions.

        Returns:
            Suggestions newest first, empty when Redis fails.
        """
        prefix = normalize_query(prefix)

        try:
            recent = self.client.zrevrange(self.key, 0, self.max_size - 1)
        except redis.RedisError as e:
            logger.warning(f"Could not read query history: {e}")
            return []

        return [query for query in recent if query.startswith(prefix)][:limit]
