"""
Response caching for idempotent routes.
"""

from typing import Any, Callable, Optional, Tuple

from fastapi.responses import JSONResponse

from ..cache import QueryParams, ResponseCache


CACHE_HEADER = "X-Cache"


def cached_call(
    cache: ResponseCache,
    route: str,
    params: Optional[QueryParams],
    ttl: int,
    produce: Callable[[], Any]
) -> Tuple[Any, str]:
    """
    Answer from the cache, or run the handler and cache its body.

    The key is resolved once, before the handler runs; the body is
    stored under that key. Handler errors propagate and nothing is stored.

    Args:
        cache: Response cache.
        route: Request path.
        params: Normalized query parameters.
        ttl: Entry lifetime in seconds.
        produce: Callable returning the JSON body on a miss.

    Returns:
        Tuple (body, "HIT" or "MISS").
    """
    lookup = cache.lookup(route, params)

    if lookup.hit:
        return lookup.body, lookup.status

    body = produce()
    cache.store(lookup.key, body, ttl)
    return body, lookup.status


def cached_response(body: Any, status: str) -> JSONResponse:
    """JSON response tagged with its cache status."""
    return JSONResponse(content=body, headers={CACHE_HEADER: status})
