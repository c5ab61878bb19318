"""
Query planning for the document index.

Turns user input into a single bool query that matches on the file name,
on tags, and on individual pages through a nested query whose inner hits
carry the per-page highlights.
"""

from typing import List, Optional

from ..core import get_config
from ..core.config_loader import SearchConfig
from .models import HIGHLIGHT_FIELD, INNER_HITS_NAME, SearchRequest


# Elasticsearch index.max_result_window default; from + size may not exceed it
MAX_RESULT_WINDOW = 10000


def query_terms(text: str) -> List[str]:
    """Lowercased whitespace-split tokens, duplicates removed in order."""
    seen = {}
    for token in text.lower().split():
        seen.setdefault(token, None)
    return list(seen)


class QueryPlanner:
    """
    Builds search requests from query text and a page number.

    Page size comes from configuration, never from the caller.
    """

    def __init__(self, search_config: SearchConfig = None):
        self.config = search_config or get_config().search

    @property
    def page_size(self) -> int:
        return self.config.page_size

    @staticmethod
    def clamp_page(page) -> int:
        """Coerce a page parameter to an int of at least 1."""
        try:
            page = int(page)
        except (TypeError, ValueError):
            return 1
        return max(1, page)

    def build_query(self, text: str) -> dict:
        """
        Build the query DSL for non-blank text.

        Args:
            text: Stripped query text.

        Returns:
            Bool query with name, tag and nested page clauses.
        """
        cfg = self.config

        name_clauses = [
            {"match_phrase": {"originalName": {"query": text, "boost": cfg.name_boost}}},
            {"term": {"originalName.keyword": {"value": text, "boost": cfg.name_boost}}}
        ]

        tags_clause = {
            "terms": {"tags": query_terms(text), "boost": cfg.tags_boost}
        }

        pages_clause = {
            "nested": {
                "path": "pages",
                "score_mode": "max",
                "query": {"match": {HIGHLIGHT_FIELD: text}},
                "inner_hits": {
                    "name": INNER_HITS_NAME,
                    "size": cfg.inner_hits_size,
                    "_source": ["pages.pageNumber"],
                    "highlight": {
                        "fields": {
                            HIGHLIGHT_FIELD: {
                                "fragment_size": cfg.fragment_size,
                                "number_of_fragments": cfg.number_of_fragments
                            }
                        },
                        "pre_tags": [cfg.pre_tag],
                        "post_tags": [cfg.post_tag]
                    }
                }
            }
        }

        return {
            "bool": {
                "should": name_clauses + [tags_clause, pages_clause],
                "minimum_should_match": 1
            }
        }

    def plan(self, text: str, page=1) -> Optional[SearchRequest]:
        """
        Plan a search.

        Args:
            text: Raw query text.
            page: Requested page, clamped to at least 1.

        Returns:
            SearchRequest, or None for blank text. Pages past the
            backend result window request no hits.
        """
        text = (text or "").strip()
        if not text:
            return None

        page = self.clamp_page(page)
        offset = (page - 1) * self.page_size
        size = min(self.page_size, max(0, MAX_RESULT_WINDOW - offset))
        if size == 0:
            # Beyond the window only the total is fetched
            offset = 0

        return SearchRequest(
            query=self.build_query(text),
            page=page,
            size=size,
            offset=offset,
            track_total_hits=self.config.track_total_hits
        )
