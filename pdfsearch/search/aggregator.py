"""
Aggregation of raw backend hits into result pages.

Hits are folded by document id. Highlight fragments are normalized and
kept once each, in the order they were first seen.
"""

from typing import Any, Dict, Iterable, List

from ..core import get_config, get_logger
from ..utils import normalize_excerpt
from .models import RawHit, SearchPage, SearchResultItem, Snippet, compute_total_pages

logger = get_logger(__name__)


def parse_total(hits_section: Dict[str, Any]) -> int:
    """Read hits.total, which is an object or a bare number."""
    total = hits_section.get("total")
    if isinstance(total, dict):
        total = total.get("value")
    try:
        return int(total or 0)
    except (TypeError, ValueError):
        return 0


def parse_hits(response: Dict[str, Any]) -> List[RawHit]:
    """Parse hits.hits, dropping unusable entries."""
    raw = (response.get("hits") or {}).get("hits") or []
    parsed = (RawHit.from_es(hit) for hit in raw)
    return [hit for hit in parsed if hit is not None]


class ResultAggregator:
    """Folds backend responses into SearchPage objects."""

    def __init__(self, page_size: int = None):
        self.page_size = page_size or get_config().search.page_size

    def fold(self, hits: Iterable[RawHit]) -> List[SearchResultItem]:
        """
        Merge hits sharing a document id into single items.

        Args:
            hits: Parsed hits in backend order.

        Returns:
            Items in order of first appearance.
        """
        items: Dict[str, SearchResultItem] = {}
        seen_fragments: Dict[str, Dict[str, None]] = {}

        for hit in hits:
            item = items.get(hit.document_id)
            if item is None:
                source = hit.source
                item = SearchResultItem(
                    document_id=hit.document_id,
                    file_name=source.get("originalName"),
                    uploaded_at=source.get("uploadedAt"),
                    author=source.get("author"),
                    tags=list(source.get("tags") or []),
                    score=hit.score
                )
                items[hit.document_id] = item
                seen_fragments[hit.document_id] = {}

            fragments = seen_fragments[hit.document_id]

            for page_hit in hit.page_hits:
                if item.page_number is None and page_hit.page_number is not None:
                    item.page_number = page_hit.page_number

                for raw_fragment in page_hit.fragments:
                    fragment = normalize_excerpt(raw_fragment)
                    if not fragment or fragment in fragments:
                        continue
                    fragments[fragment] = None
                    item.snippets.append(Snippet(page_number=page_hit.page_number, snippet=fragment))

            item.excerpts = list(fragments)

        return list(items.values())

    def aggregate(self, response: Dict[str, Any], query: str = "", page: int = 1) -> SearchPage:
        """
        Build a result page from a backend response.

        Args:
            response: Raw search response body.
            query: Query text echoed in the page.
            page: Requested page number.

        Returns:
            SearchPage with the backend document-level total.
        """
        total = parse_total(response.get("hits") or {})
        items = self.fold(parse_hits(response))

        return SearchPage(
            query=query,
            page=page,
            page_size=self.page_size,
            total=total,
            total_pages=compute_total_pages(total, self.page_size),
            items=items
        )
