"""
Indexer module for the ingestion pipeline.

Fingerprints extracted text for deduplication, derives tags, and
coordinates storing, indexing and cache invalidation for uploads and
bulk directory runs.
"""

from .fingerprint import Fingerprint, compute_fingerprint, compute_content_hash, normalize_author, UNKNOWN_AUTHOR
from .stop_words import DEFAULT_STOP_WORDS, ENGLISH_STOP_WORDS, FRENCH_STOP_WORDS
from .tag_extractor import TagExtractor, extract_tags, tokenize
from .ingestion import IngestionCoordinator, IndexResult
from .index_builder import IndexBuilder, IndexingStats

__all__ = [
    "Fingerprint",
    "compute_fingerprint",
    "compute_content_hash",
    "normalize_author",
    "UNKNOWN_AUTHOR",
    "DEFAULT_STOP_WORDS",
    "ENGLISH_STOP_WORDS",
    "FRENCH_STOP_WORDS",
    "TagExtractor",
    "extract_tags",
    "tokenize",
    "IngestionCoordinator",
    "IndexResult",
    "IndexBuilder",
    "IndexingStats"
]
