"""
PDF Search Service package.

Ingests uploaded PDF documents into Elasticsearch with per-page granularity,
deduplicates them by content fingerprint, and serves highlighted, paginated
search results through a Redis-backed versioned response cache.
"""

__version__ = "1.0.0"
