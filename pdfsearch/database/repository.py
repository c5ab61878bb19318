"""
Document repository for the Elasticsearch "pdfs" index.

Provides the frozen document record, its conversion to and from index
sources, and the read/write operations used by ingestion and search.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from elasticsearch import ConflictError, Elasticsearch, NotFoundError

from ..core import (
    get_config,
    get_logger,
    BackendUnavailableError,
    DocumentNotFoundError,
    DuplicateContentError
)
from ..extraction.models import PageText
from .connection import get_client, index_missing, search_call
from .schema import init_schema

logger = get_logger(__name__)


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string from the index, None when absent or invalid."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class IndexedDocument:
    """
    One uploaded PDF as stored in the index.

    Every field is fixed at ingestion. Pages are empty when the record
    was loaded with the page texts excluded.
    """
    stored_name: str
    original_name: str
    content_hash: str
    author: str
    byte_size: int
    created_at: Optional[datetime]
    tags: Tuple[str, ...]
    uploaded_at: datetime
    uploader_id: str
    storage_path: str
    pages: Tuple[PageText, ...] = field(default=())

    @classmethod
    def build(
        cls,
        *,
        stored_name: str,
        original_name: str,
        content_hash: str,
        author: str,
        byte_size: int,
        created_at: Optional[datetime],
        tags: Iterable[str],
        pages: Iterable[PageText],
        uploader_id: str,
        storage_path: str,
        uploaded_at: datetime = None
    ) -> "IndexedDocument":
        """Assemble a record from extracted metadata and derived values."""
        return cls(
            stored_name=stored_name,
            original_name=original_name,
            content_hash=content_hash,
            author=author,
            byte_size=int(byte_size),
            created_at=created_at,
            tags=tuple(tags),
            uploaded_at=uploaded_at or datetime.now(timezone.utc),
            uploader_id=uploader_id,
            storage_path=str(storage_path),
            pages=tuple(pages)
        )

    def to_source(self) -> Dict[str, Any]:
        """Serialize to the index document body."""
        return {
            "storedName": self.stored_name,
            "originalName": self.original_name,
            "contentHash": self.content_hash,
            "author": self.author,
            "byteSize": self.byte_size,
            "createdAt": _format_datetime(self.created_at),
            "tags": list(self.tags),
            "uploadedAt": _format_datetime(self.uploaded_at),
            "uploaderId": self.uploader_id,
            "storagePath": self.storage_path,
            "pages": [
                {"pageNumber": page.page_number, "text": page.text}
                for page in self.pages
            ]
        }

    @classmethod
    def from_source(cls, source: Dict[str, Any]) -> "IndexedDocument":
        """Rebuild a record from an index document body."""
        pages = tuple(
            PageText(page_number=int(page.get("pageNumber", 0)), text=page.get("text", ""))
            for page in source.get("pages") or []
        )
        return cls(
            stored_name=source.get("storedName", ""),
            original_name=source.get("originalName", ""),
            content_hash=source.get("contentHash", ""),
            author=source.get("author", ""),
            byte_size=int(source.get("byteSize") or 0),
            created_at=_parse_datetime(source.get("createdAt")),
            tags=tuple(source.get("tags") or ()),
            uploaded_at=_parse_datetime(source.get("uploadedAt")),
            uploader_id=source.get("uploaderId", ""),
            storage_path=source.get("storagePath", ""),
            pages=pages
        )

    def summary(self) -> Dict[str, Any]:
        """Public metadata without page texts or storage location."""
        return {
            "fileName": self.original_name,
            "storedName": self.stored_name,
            "author": self.author,
            "size": self.byte_size,
            "tags": list(self.tags),
            "createdAt": _format_datetime(self.created_at),
            "uploadedAt": _format_datetime(self.uploaded_at),
            "pageCount": len(self.pages)
        }


@dataclass(frozen=True)
class StoredDocument:
    """A document together with its index id."""
    id: str
    document: IndexedDocument

    def to_dict(self) -> Dict[str, Any]:
        data = {"id": self.id}
        data.update(self.document.summary())
        data.pop("pageCount")
        return data


class DocumentRepository:
    """
    Repository for document operations on the search index.

    Every call goes through search_call() so connection problems surface
    as BackendUnavailableError.
    """

    def __init__(self, client: Elasticsearch = None, index_name: str = None):
        """
        Initialize the repository.

        Args:
            client: Elasticsearch client. Defaults to the shared client.
            index_name: Index to operate on. Defaults to config value.
        """
        self.client = client or get_client()
        self.index_name = index_name or get_config().elasticsearch.index_name

    def create(self, document_id: str, document: IndexedDocument) -> str:
        """
        Write a new document and make it visible to searches.

        The create operation fails when the id already exists, which makes
        concurrent uploads of the same content collapse into one document.

        Args:
            document_id: Id to store the document under.
            document: Record to write.

        Returns:
            The stored document id.

        Raises:
            DuplicateContentError: If the id is already taken.
            BackendUnavailableError: If the write fails.
        """
        with search_call("document create"):
            try:
                response = self.client.create(
                    index=self.index_name,
                    id=document_id,
                    document=document.to_source()
                )
            except ConflictError:
                raise DuplicateContentError(
                    "File already indexed",
                    existing_id=document_id
                )

        stored_id = response["_id"]
        self.refresh()

        logger.debug(f"Indexed {document.original_name} as {stored_id}")
        return stored_id

    def ensure_index(self) -> bool:
        """Create the index if it is missing; True when this call created it."""
        return init_schema(self.client, self.index_name)

    def refresh(self) -> bool:
        """
        Force pending writes to become searchable.

        Returns:
            False if the refresh failed; writes then become visible at the
            next scheduled refresh.
        """
        try:
            with search_call("refresh"):
                self.client.indices.refresh(index=self.index_name)
            return True
        except BackendUnavailableError as e:
            logger.error(f"Index refresh failed, new documents may be invisible briefly: {e}")
            return False

    def find_duplicate(self, content_hash: str, author: str, byte_size: int) -> Optional[str]:
        """
        Look up a document with the same fingerprint.

        Returns:
            Id of the existing document, or None.
        """
        query = {
            "bool": {
                "filter": [
                    {"term": {"contentHash": content_hash}},
                    {"term": {"author": author}},
                    {"term": {"byteSize": byte_size}}
                ]
            }
        }

        with search_call("duplicate check"):
            response = self.client.search(
                index=self.index_name,
                query=query,
                size=1,
                source=False
            )

        hits = response["hits"]["hits"]
        return hits[0]["_id"] if hits else None

    def get_by_id(self, document_id: str) -> StoredDocument:
        """
        Fetch a document without its page texts.

        Raises:
            DocumentNotFoundError: If the index has no such document.
        """
        with search_call("document get"):
            try:
                response = self.client.get(
                    index=self.index_name,
                    id=document_id,
                    source_excludes=["pages"]
                )
            except NotFoundError as e:
                if index_missing(e):
                    raise
                raise DocumentNotFoundError("Document not found", document_id=document_id)

        return StoredDocument(
            id=response["_id"],
            document=IndexedDocument.from_source(response["_source"] or {})
        )

    def list_recent(self, limit: int) -> List[StoredDocument]:
        """
        List documents newest first, without page texts.

        Args:
            limit: Maximum number of documents.
        """
        with search_call("document list"):
            response = self.client.search(
                index=self.index_name,
                query={"match_all": {}},
                sort=[{"uploadedAt": {"order": "desc"}}],
                size=limit,
                source_excludes=["pages"]
            )

        return [
            StoredDocument(id=hit["_id"], document=IndexedDocument.from_source(hit.get("_source") or {}))
            for hit in response["hits"]["hits"]
        ]

    def delete(self, document_id: str) -> None:
        """
        Delete a document and refresh the index.

        Raises:
            DocumentNotFoundError: If the index has no such document.
        """
        with search_call("document delete"):
            try:
                self.client.delete(index=self.index_name, id=document_id, refresh=True)
            except NotFoundError as e:
                if index_missing(e):
                    raise
                raise DocumentNotFoundError("Document not found", document_id=document_id)

    def search(self, request_kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run a planned search request.

        Args:
            request_kwargs: Keyword arguments for the client's search call.

        Returns:
            Raw response body.
        """
        with search_call("search"):
            response = self.client.search(index=self.index_name, **request_kwargs)

        return getattr(response, "body", response)

    def count(self) -> int:
        """Get total document count."""
        with search_call("count"):
            response = self.client.count(index=self.index_name)
        return response["count"]
