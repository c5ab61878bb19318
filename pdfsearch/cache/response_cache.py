"""
Versioned response cache backed by Redis.

Cached GET responses are keyed by route, sorted query parameters and the
current cache version. Any change to the document corpus increments the
version, which moves every reader to a fresh key space at once; old
entries are never read again and expire through their TTL.

The cache never fails a request: lookup and store errors are logged and
behave as a miss.
"""

import json
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

import redis

from ..core import get_config, get_logger, BackendUnavailableError
from .connection import get_redis

logger = get_logger(__name__)


VERSION_KEY = "cacheVersion"
DELETE_BATCH_SIZE = 500

QueryParams = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


@dataclass(frozen=True)
class CacheLookup:
    """
    Result of a cache read.

    Attributes:
        key: Key the response should be stored under, None when the
             cache store could not be reached.
        body: Deserialized cached body, None on a miss.
    """
    key: Optional[str]
    body: Any = None

    @property
    def hit(self) -> bool:
        return self.body is not None

    @property
    def status(self) -> str:
        return "HIT" if self.hit else "MISS"


def _param_pairs(params: Optional[QueryParams]) -> list:
    """Flatten query parameters into (name, value) string pairs."""
    if not params:
        return []

    items = params.items() if isinstance(params, Mapping) else params
    pairs = []
    for name, value in items:
        if isinstance(value, (list, tuple)):
            pairs.extend((str(name), str(v)) for v in value)
        else:
            pairs.append((str(name), str(value)))
    return pairs


class ResponseCache:
    """
    Read-through/write-through cache for idempotent read responses.

    The version counter is read from Redis for every request and never
    held in process memory, so all service instances agree on it.
    """

    def __init__(
        self,
        client: redis.Redis = None,
        key_prefix: str = None,
        default_ttl: int = None
    ):
        """
        Initialize the cache.

        Args:
            client: Redis client. Defaults to the shared client.
            key_prefix: Namespace for every key. Defaults to config value.
            default_ttl: TTL in seconds when store() gets none.
        """
        config = get_config()
        self.client = client if client is not None else get_redis()
        self.key_prefix = key_prefix or config.redis.key_prefix
        self.default_ttl = default_ttl or config.cache.search_ttl_seconds

    @property
    def version_key(self) -> str:
        return f"{self.key_prefix}:{VERSION_KEY}"

    @staticmethod
    def make_key(prefix: str, route: str, params: Optional[QueryParams], version: int) -> str:
        """
        Build the canonical cache key.

        Parameters are sorted by name, then value, so their order in the
        request does not matter.

        Args:
            prefix: Key namespace.
            route: Request path.
            params: Query parameters as a mapping or (name, value) pairs.
            version: Cache version the key belongs to.

        Returns:
            Key of the form "<prefix>:v<version>:<route>?<query>".
        """
        query = urlencode(sorted(_param_pairs(params)))
        key = f"{prefix}:v{int(version)}:{route}"
        return f"{key}?{query}" if query else key

    def get_version(self) -> int:
        """
        Read the current cache version, creating it at 1 if absent.

        Raises:
            BackendUnavailableError: If Redis cannot be reached.
        """
        try:
            value = self.client.get(self.version_key)
            if value is None:
                self.client.set(self.version_key, 1, nx=True)
                value = self.client.get(self.version_key)
            return int(value)
        except (redis.RedisError, TypeError, ValueError) as e:
            raise BackendUnavailableError(
                f"Cannot read cache version: {e}",
                backend="cache"
            )

    def bump_version(self) -> int:
        """
        Atomically increment the cache version.

        Returns:
            The new version.

        Raises:
            BackendUnavailableError: If Redis cannot be reached.
        """
        try:
            version = int(self.client.incr(self.version_key))
        except redis.RedisError as e:
            raise BackendUnavailableError(
                f"Cannot bump cache version: {e}",
                backend="cache"
            )

        logger.info(f"Cache version bumped to {version}")
        return version

    def key_for(self, route: str, params: Optional[QueryParams] = None) -> str:
        """Build the key for a request under the current version."""
        return self.make_key(self.key_prefix, route, params, self.get_version())

    def lookup(self, route: str, params: Optional[QueryParams] = None) -> CacheLookup:
        """
        Read a cached response.

        Args:
            route: Request path.
            params: Query parameters.

        Returns:
            CacheLookup; a miss when nothing is cached or Redis fails.
        """
        try:
            key = self.key_for(route, params)
            raw = self.client.get(key)
        except (redis.RedisError, BackendUnavailableError) as e:
            logger.warning(f"Cache lookup failed for {route}, bypassing cache: {e}")
            return CacheLookup(key=None)

        if raw is None:
            return CacheLookup(key=key)

        try:
            return CacheLookup(key=key, body=json.loads(raw))
        except ValueError as e:
            logger.warning(f"Discarding unreadable cache entry {key}: {e}")
            return CacheLookup(key=key)

    def store(self, key: Optional[str], body: Any, ttl: int = None) -> bool:
        """
        Store a response body under a key from lookup().

        Args:
            key: Cache key; None skips the write.
            body: JSON-serializable response body.
            ttl: Time to live in seconds.

        Returns:
            True if the entry was written.
        """
        if key is None:
            return False

        try:
            self.client.set(key, json.dumps(body), ex=ttl or self.default_ttl)
            return True
        except (redis.RedisError, TypeError, ValueError) as e:
            logger.warning(f"Cache store failed for {key}: {e}")
            return False

    def clear(self) -> int:
        """
        Delete every cached response in this cache's namespace.

        The version counter is kept so versions never go backwards.

        Returns:
            Number of deleted entries.

        Raises:
            BackendUnavailableError: If Redis cannot be reached.
        """
        deleted = 0
        batch = []

        try:
            for key in self.client.scan_iter(match=f"{self.key_prefix}:v*", count=DELETE_BATCH_SIZE):
                batch.append(key)
                if len(batch) >= DELETE_BATCH_SIZE:
                    deleted += self.client.delete(*batch)
                    batch.clear()
            if batch:
                deleted += self.client.delete(*batch)
        except redis.RedisError as e:
            raise BackendUnavailableError(f"Cannot clear cache: {e}", backend="cache")

        logger.info(f"Cleared {deleted} cached responses")
        return deleted
