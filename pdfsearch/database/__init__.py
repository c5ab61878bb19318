"""
Database module for Elasticsearch persistence.

Provides client management, the index definition with nested pages, and
document operations for the "pdfs" index.
"""

from .connection import build_client, get_client, close_client, search_call
from .schema import init_schema, reset_schema, get_statistics, INDEX_MAPPINGS
from .repository import DocumentRepository, IndexedDocument, StoredDocument

__all__ = [
    "build_client",
    "get_client",
    "close_client",
    "search_call",
    "init_schema",
    "reset_schema",
    "get_statistics",
    "INDEX_MAPPINGS",
    "DocumentRepository",
    "IndexedDocument",
    "StoredDocument"
]
