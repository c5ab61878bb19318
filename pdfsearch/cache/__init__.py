"""
Cache module: versioned response cache and query history on Redis.
"""

from .connection import build_redis, get_redis, close_redis
from .response_cache import ResponseCache, CacheLookup, QueryParams
from .query_history import QueryHistory, normalize_query

__all__ = [
    "build_redis",
    "get_redis",
    "close_redis",
    "ResponseCache",
    "CacheLookup",
    "QueryParams",
    "QueryHistory",
    "normalize_query"
]
