"""
Upload ingestion pipeline.

Orchestrates one upload end to end: storing the bytes, extracting text and
metadata, deduplicating by content fingerprint, tagging, writing the index
record and invalidating cached responses. Also hosts the corpus-level
mutations (single delete, full reset) since they share the same
invalidation rules.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..cache import ResponseCache
from ..core import (
    get_config,
    get_logger,
    BackendUnavailableError,
    BlobNotFoundError,
    DuplicateContentError,
    InconsistentStateError,
    ValidationError
)
from ..database import DocumentRepository, IndexedDocument, reset_schema
from ..extraction import PDFExtractor
from ..storage import BlobStore
from ..utils import generate_stored_name
from .fingerprint import Fingerprint, compute_fingerprint
from .tag_extractor import TagExtractor

logger = get_logger(__name__)


@dataclass(frozen=True)
class IndexResult:
    """Outcome of a successful ingestion."""
    id: str
    document: IndexedDocument

    def to_dict(self) -> dict:
        data = {"id": self.id}
        data.update(self.document.summary())
        return data


class IngestionCoordinator:
    """
    Runs uploads through the ingestion pipeline.

    The stored blob is removed whenever ingestion fails before the index
    record is written, so storage never holds files the index does not
    know about.
    """

    def __init__(
        self,
        repository: DocumentRepository = None,
        blob_store: BlobStore = None,
        extractor: PDFExtractor = None,
        cache: ResponseCache = None,
        tag_extractor: TagExtractor = None
    ):
        """
        Initialize the coordinator.

        Args:
            repository: Search index repository.
            blob_store: Storage for the raw files.
            extractor: PDF text and metadata extractor.
            cache: Response cache whose version is bumped on every change.
            tag_extractor: Tag derivation.
        """
        self.config = get_config()
        self.repository = repository or DocumentRepository()
        self.blob_store = blob_store or BlobStore()
        self.extractor = extractor or PDFExtractor()
        self.cache = cache or ResponseCache()
        self.tag_extractor = tag_extractor or TagExtractor()

    def _validate(self, data: bytes, original_name: str) -> None:
        if not data:
            raise ValidationError("Uploaded file is empty")

        extensions = [ext.lower() for ext in self.config.extraction.supported_extensions]
        if Path(original_name or "").suffix.lower() not in extensions:
            raise ValidationError(
                "Only PDF files are accepted",
                {"file_name": original_name}
            )

        max_bytes = self.config.extraction.max_file_size_mb * 1024 * 1024
        if len(data) > max_bytes:
            raise ValidationError(
                f"File exceeds {self.config.extraction.max_file_size_mb} MB",
                {"file_name": original_name, "size": len(data)}
            )

    def _discard_blob(self, path: Path) -> None:
        """Delete a stored blob after a failed ingestion, logging failures."""
        try:
            self.blob_store.delete(path)
        except BackendUnavailableError as e:
            logger.error(f"Could not remove orphaned upload {path}: {e.message}")

    def _find_duplicate(self, fingerprint: Fingerprint) -> Optional[str]:
        """
        Look up an indexed document with the same fingerprint.

        A missing index holds no duplicates; it is recreated so the
        following write lands in the proper mapping.
        """
        try:
            return self.repository.find_duplicate(
                fingerprint.content_hash,
                fingerprint.author,
                fingerprint.byte_size
            )
        except BackendUnavailableError as e:
            if not e.details.get("index_missing"):
                raise
            logger.warning("Search index missing during upload, recreating it")
            self.repository.ensure_index()
            return None

    def ingest(self, data: bytes, original_name: str, uploader_id: str) -> IndexResult:
        """
        Ingest one uploaded PDF.

        Args:
            data: Raw file bytes.
            original_name: File name as uploaded.
            uploader_id: Identity of the uploading user.

        Returns:
            IndexResult with the new document id and record.

        Raises:
            ValidationError: If the upload is empty, too large or not a PDF.
            ExtractionError: If the PDF cannot be read.
            DuplicateContentError: If the same content is already indexed.
            BackendUnavailableError: If storage or the index fails.
            InconsistentStateError: If the record was written but cached
                responses could not be invalidated.
        """
        self._validate(data, original_name)

        stored_name = generate_stored_name(original_name)
        path = self.blob_store.store(data, stored_name)

        try:
            document_id, document = self._index_blob(path, data, stored_name, original_name, uploader_id)
        except Exception:
            self._discard_blob(path)
            raise

        self._invalidate(document_id)

        logger.info(
            f"Ingested {original_name} as {document_id} "
            f"({len(document.pages)} pages, {len(document.tags)} tags)"
        )
        return IndexResult(id=document_id, document=document)

    def _index_blob(self, path: Path, data: bytes, stored_name: str, original_name: str, uploader_id: str):
        """Extract, deduplicate and write the record for a stored blob."""
        extracted = self.extractor.extract_document(path)

        fingerprint = compute_fingerprint(
            extracted.full_text,
            extracted.metadata.author,
            len(data)
        )

        existing_id = self._find_duplicate(fingerprint)
        if existing_id:
            logger.info(f"Duplicate upload of {original_name}, matches {existing_id}")
            raise DuplicateContentError("File already indexed", existing_id=existing_id)

        document = IndexedDocument.build(
            stored_name=stored_name,
            original_name=original_name,
            content_hash=fingerprint.content_hash,
            author=fingerprint.author,
            byte_size=fingerprint.byte_size,
            created_at=extracted.metadata.created_at,
            tags=self.tag_extractor.extract(extracted.full_text),
            pages=extracted.pages,
            uploader_id=uploader_id,
            storage_path=str(path)
        )

        return self.repository.create(fingerprint.document_id, document), document

    def _invalidate(self, document_id: Optional[str] = None) -> int:
        """Bump the cache version after a committed change."""
        try:
            return self.cache.bump_version()
        except BackendUnavailableError as e:
            logger.error(
                f"Index changed ({document_id or 'corpus'}) but cache version bump failed, "
                f"cached responses are stale until the version is bumped: {e.message}"
            )
            raise InconsistentStateError(
                "Index updated but cached responses could not be invalidated",
                document_id=document_id,
                details={"cause": e.message}
            )

    def delete_document(self, document_id: str) -> None:
        """
        Remove one document from the index and storage.

        Once the index record is gone the cache version is bumped even if
        the blob cannot be removed; such a blob is logged as orphaned.

        Raises:
            DocumentNotFoundError: If the index has no such document.
            InconsistentStateError: If the version bump fails.
        """
        stored = self.repository.get_by_id(document_id)
        self.repository.delete(document_id)

        path = stored.document.storage_path
        if path:
            try:
                if not self.blob_store.delete(path):
                    logger.warning(f"Blob for {document_id} was already missing: {path}")
            except BackendUnavailableError as e:
                logger.error(f"Blob for deleted document {document_id} is orphaned at {path}: {e.message}")

        self._invalidate(document_id)
        logger.info(f"Deleted document {document_id}")

    def reset_corpus(self) -> int:
        """
        Recreate the index, drop every stored file and clear the cache.

        The index goes first so a search backend outage leaves the files
        in place. The version is bumped even when a step fails, since the
        index may already have been dropped.

        Returns:
            Number of deleted files.
        """
        try:
            reset_schema(self.repository.client, self.repository.index_name)
            removed = self.blob_store.clear()
        except Exception:
            try:
                self.cache.bump_version()
            except BackendUnavailableError as e:
                logger.error(f"Cache version bump failed after aborted reset: {e.message}")
            raise

        try:
            self.cache.clear()
        except BackendUnavailableError as e:
            logger.warning(f"Cache clear failed during reset: {e.message}")

        self._invalidate()
        logger.info(f"Corpus reset: {removed} stored files removed")
        return removed

    def open_blob(self, document_id: str):
        """
        Resolve a document id to its record and stored file.

        Returns:
            Tuple (StoredDocument, Path).

        Raises:
            DocumentNotFoundError: If the index has no such document.
            BlobNotFoundError: If the record exists but its file is gone.
        """
        stored = self.repository.get_by_id(document_id)
        path = Path(stored.document.storage_path)

        if not stored.document.storage_path or not self.blob_store.exists(path):
            raise BlobNotFoundError("File not found", path=str(path))

        return stored, path
