"""
Service wiring and request dependencies for the HTTP layer.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Header, HTTPException, Request

from ..cache import QueryHistory, ResponseCache
from ..database import DocumentRepository
from ..indexer import IngestionCoordinator
from ..search import SearchEngine
from ..storage import BlobStore


USER_HEADER = "X-User-Id"


@dataclass
class Services:
    """Collaborators shared by every request of one application."""
    repository: DocumentRepository
    blob_store: BlobStore
    cache: ResponseCache
    history: QueryHistory
    engine: SearchEngine
    ingestion: IngestionCoordinator

    @classmethod
    def from_config(cls) -> "Services":
        """Build services on the shared clients and configuration."""
        repository = DocumentRepository()
        blob_store = BlobStore()
        cache = ResponseCache()

        return cls(
            repository=repository,
            blob_store=blob_store,
            cache=cache,
            history=QueryHistory(client=cache.client),
            engine=SearchEngine(repository=repository),
            ingestion=IngestionCoordinator(
                repository=repository,
                blob_store=blob_store,
                cache=cache
            )
        )


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_current_user(x_user_id: Optional[str] = Header(default=None)) -> str:
    """
    Identity of the caller, set by the authentication layer in front.

    Raises:
        HTTPException: 401 when the header is missing or blank.
    """
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user_id
