"""
Elasticsearch connection management for the PDF Search Service.

Builds the shared client from configuration and translates transport and
API failures into the service's exception hierarchy.
"""

from contextlib import contextmanager
from typing import Generator, Optional

from elasticsearch import ApiError, ConflictError, Elasticsearch, NotFoundError, TransportError

from ..core import get_config, get_logger, BackendUnavailableError
from ..core.config_loader import ElasticsearchConfig

logger = get_logger(__name__)


INDEX_NOT_FOUND = "index_not_found_exception"


def build_client(es_config: ElasticsearchConfig = None) -> Elasticsearch:
    """
    Create an Elasticsearch client.

    Args:
        es_config: Connection settings. Defaults to config value.

    Returns:
        Configured client; no request is sent until first use.
    """
    es_config = es_config or get_config().elasticsearch

    kwargs = {
        "hosts": es_config.hosts,
        "request_timeout": es_config.request_timeout,
        "verify_certs": es_config.verify_certs,
    }
    if es_config.username:
        kwargs["basic_auth"] = (es_config.username, es_config.password)

    logger.debug(f"Creating Elasticsearch client for {', '.join(es_config.hosts)}")
    return Elasticsearch(**kwargs)


def index_missing(error: ApiError) -> bool:
    """Whether a NotFoundError means the index itself is gone."""
    body = getattr(error, "body", None)
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        if body["error"].get("type") == INDEX_NOT_FOUND:
            return True
    return getattr(error, "message", None) == INDEX_NOT_FOUND


@contextmanager
def search_call(operation: str) -> Generator[None, None, None]:
    """
    Wrap a backend call and convert its failures to BackendUnavailableError.

    ConflictError passes through untouched so callers can map it to a
    duplicate. A NotFoundError that escapes the wrapped block (the index
    is missing) becomes a BackendUnavailableError flagged with
    details["index_missing"].

    Args:
        operation: Short description used in the error message.
    """
    try:
        yield
    except ConflictError:
        raise
    except NotFoundError as e:
        logger.error(f"Search index missing during {operation}: {e}")
        raise BackendUnavailableError(
            f"Search index missing during {operation}",
            backend="search",
            details={"status": 404, "index_missing": True, "error": str(e)}
        )
    except TransportError as e:
        logger.error(f"Search backend unreachable during {operation}: {e}")
        raise BackendUnavailableError(
            f"Search backend unreachable during {operation}",
            backend="search",
            details={"error": str(e)}
        )
    except ApiError as e:
        status = getattr(e, "status_code", None)
        logger.error(f"Search backend error during {operation} (status {status}): {e}")
        raise BackendUnavailableError(
            f"Search backend error during {operation}",
            backend="search",
            details={"status": status, "error": str(e)}
        )


_client: Optional[Elasticsearch] = None


def get_client() -> Elasticsearch:
    """Get the singleton Elasticsearch client."""
    global _client
    if _client is None:
        _client = build_client()
    return _client


def close_client() -> None:
    """Close and forget the singleton client."""
    global _client
    if _client is not None:
        _client.close()
        _client = None
