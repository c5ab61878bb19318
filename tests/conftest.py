"""
Pytest fixtures and configuration for the test suite.

Provides temporary directories, sample PDFs, mock configurations and an
in-memory Redis double so tests run without Elasticsearch or Redis.
"""

import fnmatch
import json
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock

import sys
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


class FakeRedis:
    """
    In-memory stand-in for the subset of redis.Redis the service uses.

    Values are stored as strings, like a client with decode_responses=True.
    """

    def __init__(self):
        self.values = {}
        self.sorted_sets = {}
        self.ttls = {}

    def get(self, key):
        return self.values.get(key)

    def set(self, key, value, ex=None, nx=False):
        if nx and key in self.values:
            return None
        self.values[key] = str(value)
        if ex is not None:
            self.ttls[key] = ex
        return True

    def incr(self, key):
        value = int(self.values.get(key, 0)) + 1
        self.values[key] = str(value)
        return value

    def scan_iter(self, match="*", count=None):
        keys = list(self.values) + list(self.sorted_sets)
        return iter([key for key in keys if fnmatch.fnmatchcase(key, match)])

    def delete(self, *keys):
        deleted = 0
        for key in keys:
            if self.values.pop(key, None) is not None or self.sorted_sets.pop(key, None) is not None:
                deleted += 1
            self.ttls.pop(key, None)
        return deleted

    def zadd(self, key, mapping):
        self.sorted_sets.setdefault(key, {}).update(mapping)
        return len(mapping)

    def _ranked(self, key):
        members = self.sorted_sets.get(key, {})
        return sorted(members, key=lambda member: members[member])

    def zrevrange(self, key, start, stop):
        ranked = list(reversed(self._ranked(key)))
        stop = len(ranked) if stop == -1 else stop + 1
        return ranked[start:stop]

    def zremrangebyrank(self, key, start, stop):
        ranked = self._ranked(key)
        n = len(ranked)
        start = n + start if start < 0 else start
        stop = n + stop if stop < 0 else stop
        if start > stop or start >= n:
            return 0
        removed = ranked[max(start, 0):stop + 1]
        for member in removed:
            del self.sorted_sets[key][member]
        return len(removed)

    def pipeline(self):
        return FakePipeline(self)

    def close(self):
        pass


class FakePipeline:
    """Buffers commands and runs them on execute()."""

    def __init__(self, redis_client):
        self.redis_client = redis_client
        self.commands = []

    def __getattr__(self, name):
        method = getattr(self.redis_client, name)

        def queue(*args, **kwargs):
            self.commands.append((method, args, kwargs))
            return self
        return queue

    def execute(self):
        return [method(*args, **kwargs) for method, args, kwargs in self.commands]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory, cleaned up after test.
    """
    tmp = tempfile.mkdtemp(prefix="pdf_search_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_config(temp_dir: Path) -> Generator[Path, None, None]:
    """
    Create a temporary config.json for testing.

    Args:
        temp_dir: Temporary directory fixture.

    Yields:
        Path to temporary config file.
    """
    config_dir = temp_dir / "config"
    config_dir.mkdir()

    storage_dir = temp_dir / "stored_pdfs"
    storage_dir.mkdir()

    logs_dir = temp_dir / "output" / "logs"
    logs_dir.mkdir(parents=True)

    config_data = {
        "paths": {
            "storage_directory": str(storage_dir),
            "logs_directory": str(logs_dir)
        },
        "extraction": {
            "primary_backend": "pypdf2",
            "fallback_backend": "pdfplumber",
            "max_file_size_mb": 1,
            "supported_extensions": [".pdf"]
        },
        "elasticsearch": {
            "hosts": ["http://es.test:9200"],
            "index_name": "pdfs_test",
            "request_timeout": 5
        },
        "redis": {
            "url": "redis://redis.test:6379/1",
            "socket_timeout": 1,
            "key_prefix": "pdfs_test"
        },
        "search": {
            "page_size": 10,
            "name_boost": 5.0,
            "tags_boost": 2.0,
            "fragment_size": 140,
            "number_of_fragments": 3,
            "inner_hits_size": 3,
            "list_limit": 50
        },
        "tags": {
            "limit": 20,
            "min_length": 3
        },
        "cache": {
            "search_ttl_seconds": 600,
            "list_ttl_seconds": 30,
            "history_size": 5,
            "suggestion_limit": 3
        },
        "api": {
            "title": "Test PDF Search",
            "cors_origins": ["*"]
        },
        "logging": {
            "level": "DEBUG",
            "format": "%(levelname)s - %(message)s",
            "max_file_size_mb": 1,
            "backup_count": 1
        }
    }

    config_path = config_dir / "config.json"
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_data, f)

    yield config_path


@pytest.fixture
def sample_pdf_content() -> bytes:
    """
    Create minimal valid PDF content for testing.

    Returns:
        Bytes representing a minimal PDF with text.
    """
    # Minimal PDF with "Hello World" text
    pdf_content = b"""%PDF-1.4
1 0 obj
<< /Type /Catalog /Pages 2 0 R >>
endobj
2 0 obj
<< /Type /Pages /Kids [3 0 R] /Count 1 >>
endobj
3 0 obj
<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792]
   /Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>
endobj
4 0 obj
<< /Length 44 >>
stream
BT /F1 12 Tf 100 700 Td (Hello World) Tj ET
endstream
endobj
5 0 obj
<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>
endobj
xref
0 6
0000000000 65535 f
0000000009 00000 n
0000000058 00000 n
0000000115 00000 n
0000000266 00000 n
0000000359 00000 n
trailer
<< /Size 6 /Root 1 0 R >>
startxref
434
%%EOF"""
    return pdf_content


@pytest.fixture
def sample_pdf(temp_dir: Path, sample_pdf_content: bytes) -> Path:
    """
    Create a sample PDF file for testing.

    Args:
        temp_dir: Temporary directory fixture.
        sample_pdf_content: PDF content fixture.

    Returns:
        Path to the created PDF file.
    """
    pdf_path = temp_dir / "sample.pdf"
    pdf_path.write_bytes(sample_pdf_content)
    return pdf_path


@pytest.fixture
def sample_pdf_collection(temp_dir: Path, sample_pdf_content: bytes) -> Path:
    """
    Create multiple sample PDF files in a directory structure.

    Args:
        temp_dir: Temporary directory fixture.
        sample_pdf_content: PDF content fixture.

    Returns:
        Path to the data directory containing PDFs.
    """
    data_dir = temp_dir / "data"
    data_dir.mkdir(exist_ok=True)

    subdir1 = data_dir / "folder1"
    subdir1.mkdir()

    subdir2 = data_dir / "folder2"
    subdir2.mkdir()

    (data_dir / "root_doc.pdf").write_bytes(sample_pdf_content)
    (subdir1 / "doc1.pdf").write_bytes(sample_pdf_content)
    (subdir1 / "doc2.pdf").write_bytes(sample_pdf_content)
    (subdir2 / "doc3.pdf").write_bytes(sample_pdf_content)

    # Create a non-PDF file (should be ignored)
    (data_dir / "readme.txt").write_text("Not a PDF")

    return data_dir


@pytest.fixture
def reset_config_singleton():
    """
    Reset the config singleton between tests.

    This ensures each test gets a fresh config instance.
    """
    from pdfsearch.core import config_loader
    config_loader._config_instance = None
    yield
    config_loader._config_instance = None


@pytest.fixture
def clean_logging():
    """
    Remove installed log handlers before and after a test.
    """
    from pdfsearch.core.logger import reset_logging
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def reset_client_singletons():
    """
    Reset the shared Elasticsearch and Redis clients between tests.
    """
    from pdfsearch.database import connection
    from pdfsearch.cache import connection as cache_connection
    connection._client = None
    cache_connection._redis = None
    yield
    connection._client = None
    cache_connection._redis = None


@pytest.fixture
def configured(temp_config, reset_config_singleton, reset_client_singletons):
    """
    Load the temporary config as the global configuration.

    Yields:
        The loaded Config.
    """
    from pdfsearch.core.config_loader import get_config
    yield get_config(temp_config)


@pytest.fixture
def fake_redis() -> FakeRedis:
    """In-memory Redis double."""
    return FakeRedis()


@pytest.fixture
def mock_es() -> MagicMock:
    """
    Elasticsearch client mock with empty default responses.
    """
    client = MagicMock()
    client.search.return_value = {"hits": {"total": {"value": 0}, "hits": []}}
    client.create.return_value = {"_id": "doc-1", "result": "created"}
    client.count.return_value = {"count": 0}
    client.indices.exists.return_value = True
    return client
