"""
Index definition for the PDF Search Service.

Defines the "pdfs" index: document-level metadata fields plus a nested
"pages" field so every page is matched and highlighted on its own.
"""

from elasticsearch import BadRequestError, Elasticsearch

from ..core import get_config, get_logger
from .connection import get_client, search_call

logger = get_logger(__name__)


INDEX_SETTINGS = {
    "analysis": {
        "analyzer": {
            "folding": {
                "type": "custom",
                "tokenizer": "standard",
                "filter": ["lowercase", "asciifolding"]
            }
        }
    }
}

INDEX_MAPPINGS = {
    "properties": {
        "storedName": {"type": "keyword"},
        "originalName": {
            "type": "text",
            "analyzer": "folding",
            "fields": {"keyword": {"type": "keyword", "ignore_above": 512}}
        },
        "contentHash": {"type": "keyword"},
        "author": {"type": "keyword"},
        "byteSize": {"type": "long"},
        "createdAt": {"type": "date"},
        "tags": {"type": "keyword"},
        "uploadedAt": {"type": "date"},
        "uploaderId": {"type": "keyword"},
        "storagePath": {"type": "keyword", "index": False},
        "pages": {
            "type": "nested",
            "properties": {
                "pageNumber": {"type": "integer"},
                "text": {"type": "text", "analyzer": "folding"}
            }
        }
    }
}


def _index_name() -> str:
    return get_config().elasticsearch.index_name


def init_schema(client: Elasticsearch = None, index_name: str = None) -> bool:
    """
    Create the index if it does not exist.

    Concurrent instances may race on creation; losing the race is fine.

    Returns:
        True if the index was created by this call.
    """
    client = client or get_client()
    index_name = index_name or _index_name()

    with search_call("index initialization"):
        if client.indices.exists(index=index_name):
            logger.debug(f"Index already exists: {index_name}")
            return False

        try:
            client.indices.create(
                index=index_name,
                settings=INDEX_SETTINGS,
                mappings=INDEX_MAPPINGS
            )
        except BadRequestError as e:
            if "resource_already_exists_exception" in str(e):
                return False
            raise

    logger.info(f"Created index: {index_name}")
    return True


def reset_schema(client: Elasticsearch = None, index_name: str = None) -> None:
    """
    Drop and recreate the index.

    Warning: This deletes all indexed documents.
    """
    client = client or get_client()
    index_name = index_name or _index_name()

    logger.warning(f"Resetting index {index_name} - all documents will be deleted")

    with search_call("index reset"):
        client.indices.delete(index=index_name, ignore_unavailable=True)

    init_schema(client, index_name)

    logger.info("Index reset complete")


def get_statistics(client: Elasticsearch = None, index_name: str = None) -> dict:
    """
    Get index statistics for health and admin endpoints.

    Returns:
        Dictionary with document count and index name.
    """
    client = client or get_client()
    index_name = index_name or _index_name()

    with search_call("statistics"):
        response = client.count(index=index_name)

    return {
        "index": index_name,
        "total_documents": response["count"]
    }
