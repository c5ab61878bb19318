"""
Search engine over the document index.

Plans the query, runs it against the index and aggregates the hits into
a result page. Blank queries return an empty page without calling the
backend.
"""

import time
from typing import List

from ..core import get_config, get_logger
from ..database import DocumentRepository, StoredDocument
from .aggregator import ResultAggregator
from .models import SearchPage
from .query_planner import QueryPlanner

logger = get_logger(__name__)


class SearchEngine:
    """
    Full-text search with per-page highlights.

    Backend failures propagate as BackendUnavailableError.
    """

    def __init__(
        self,
        repository: DocumentRepository = None,
        planner: QueryPlanner = None,
        aggregator: ResultAggregator = None
    ):
        """Initialize the search engine with configuration."""
        self.config = get_config()
        self.repository = repository or DocumentRepository()
        self.planner = planner or QueryPlanner()
        self.aggregator = aggregator or ResultAggregator(self.planner.page_size)

    def search(self, text: str, page=1) -> SearchPage:
        """
        Execute a search.

        Args:
            text: Query text.
            page: Requested result page, clamped to at least 1.

        Returns:
            SearchPage for the requested page.
        """
        start_time = time.time()
        text = (text or "").strip()

        request = self.planner.plan(text, page)
        if request is None:
            return SearchPage.empty(text, QueryPlanner.clamp_page(page), self.planner.page_size)

        response = self.repository.search(request.to_kwargs())
        result = self.aggregator.aggregate(response, query=text, page=request.page)

        execution_time = (time.time() - start_time) * 1000
        logger.debug(
            f"Search '{text}' page {request.page}: {result.total} documents in {execution_time:.1f}ms"
        )

        return result

    def list_documents(self, limit: int = None) -> List[StoredDocument]:
        """
        List indexed documents, newest first.

        Args:
            limit: Maximum documents, capped by configuration.
        """
        max_limit = self.config.search.list_limit
        limit = min(limit or max_limit, max_limit)
        return self.repository.list_recent(limit)
