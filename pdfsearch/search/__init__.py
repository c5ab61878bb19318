"""
Search module for querying the document index.

Plans nested per-page queries, aggregates hits by document and exposes
the search engine used by the HTTP layer.
"""

from .models import (
    SearchRequest,
    PageHit,
    RawHit,
    Snippet,
    SearchResultItem,
    SearchPage,
    compute_total_pages
)
from .query_planner import QueryPlanner, query_terms
from .aggregator import ResultAggregator
from .engine import SearchEngine

__all__ = [
    "SearchRequest",
    "PageHit",
    "RawHit",
    "Snippet",
    "SearchResultItem",
    "SearchPage",
    "compute_total_pages",
    "QueryPlanner",
    "query_terms",
    "ResultAggregator",
    "SearchEngine"
]
