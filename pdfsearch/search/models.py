"""
Data models for search functionality.

Defines the planned request sent to the search backend, the parsed view
of raw backend hits, and the aggregated result page returned to callers.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..core import get_logger

logger = get_logger(__name__)


INNER_HITS_NAME = "pages_matching"
HIGHLIGHT_FIELD = "pages.text"


def compute_total_pages(total: int, page_size: int) -> int:
    """
    Number of result pages for a document-level total.

    Returns 0 for an empty result, otherwise at least 1.
    """
    if total <= 0 or page_size <= 0:
        return 0
    return max(1, math.ceil(total / page_size))


@dataclass(frozen=True)
class SearchRequest:
    """
    A planned search, ready for the backend client.

    Attributes:
        query: Query DSL body.
        page: 1-indexed result page.
        size: Documents per page.
        offset: Documents skipped.
        source_excludes: Source fields left out of the response.
        track_total_hits: Whether the backend counts every match.
    """
    query: Dict[str, Any]
    page: int
    size: int
    offset: int
    source_excludes: Tuple[str, ...] = ("pages",)
    track_total_hits: bool = True

    def to_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for Elasticsearch.search()."""
        return {
            "query": self.query,
            "from_": self.offset,
            "size": self.size,
            "source_excludes": list(self.source_excludes),
            "track_total_hits": self.track_total_hits
        }


@dataclass(frozen=True)
class PageHit:
    """One matching page inside a document hit."""
    page_number: Optional[int]
    fragments: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RawHit:
    """
    A document-level hit parsed from the backend response.

    Missing fields become None or empty values rather than errors.
    """
    document_id: str
    score: Optional[float]
    source: Dict[str, Any]
    page_hits: Tuple[PageHit, ...] = ()

    @staticmethod
    def _parse_page_hit(inner: Dict[str, Any]) -> PageHit:
        source = inner.get("_source") or {}
        page_number = source.get("pageNumber")

        if page_number is None:
            offset = (inner.get("_nested") or {}).get("offset")
            page_number = offset + 1 if isinstance(offset, int) else None

        fragments = (inner.get("highlight") or {}).get(HIGHLIGHT_FIELD) or []
        return PageHit(
            page_number=int(page_number) if page_number is not None else None,
            fragments=tuple(str(fragment) for fragment in fragments)
        )

    @classmethod
    def from_es(cls, hit: Dict[str, Any]) -> Optional["RawHit"]:
        """
        Parse one entry of hits.hits.

        Returns:
            RawHit, or None when the hit has no document id.
        """
        document_id = hit.get("_id")
        if not document_id:
            logger.warning("Dropping search hit without document id")
            return None

        inner_hits = (
            ((hit.get("inner_hits") or {}).get(INNER_HITS_NAME) or {})
            .get("hits", {})
            .get("hits", [])
        )

        return cls(
            document_id=str(document_id),
            score=hit.get("_score"),
            source=hit.get("_source") or {},
            page_hits=tuple(cls._parse_page_hit(inner) for inner in inner_hits)
        )


@dataclass
class Snippet:
    """A highlighted fragment and the page it came from."""
    page_number: Optional[int]
    snippet: str

    def to_dict(self) -> Dict[str, Any]:
        return {"pageNumber": self.page_number, "snippet": self.snippet}


@dataclass
class SearchResultItem:
    """
    One document in a result page.

    Attributes:
        document_id: Index id of the document.
        file_name: Original upload name.
        uploaded_at: Upload timestamp as stored.
        author: Document author.
        tags: Document tags.
        score: Relevance score.
        page_number: First matching page, None for metadata-only matches.
        excerpts: Distinct normalized fragments in first-seen order.
        snippets: Excerpts paired with their page numbers.
    """
    document_id: str
    file_name: Optional[str]
    uploaded_at: Optional[str]
    author: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    score: Optional[float] = None
    page_number: Optional[int] = None
    excerpts: List[str] = field(default_factory=list)
    snippets: List[Snippet] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.document_id,
            "fileName": self.file_name,
            "uploadedAt": self.uploaded_at,
            "author": self.author,
            "tags": list(self.tags),
            "score": self.score,
            "pageNumber": self.page_number,
            "excerpts": list(self.excerpts),
            "snippets": [snippet.to_dict() for snippet in self.snippets]
        }


@dataclass
class SearchPage:
    """
    One page of aggregated search results.

    Attributes:
        query: The query text.
        page: Current page number.
        page_size: Documents per page.
        total: Backend document-level total.
        total_pages: Number of result pages.
        items: Aggregated documents.
    """
    query: str
    page: int
    page_size: int
    total: int = 0
    total_pages: int = 0
    items: List[SearchResultItem] = field(default_factory=list)

    @classmethod
    def empty(cls, query: str, page: int, page_size: int) -> "SearchPage":
        return cls(query=query, page=page, page_size=page_size)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "page": self.page,
            "pageSize": self.page_size,
            "total": self.total,
            "totalPages": self.total_pages,
            "hits": [item.to_dict() for item in self.items]
        }
