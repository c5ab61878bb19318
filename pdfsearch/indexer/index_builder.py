"""
Bulk indexing of a directory of PDFs.

Feeds every file found by the scanner through the ingestion coordinator,
so files indexed from disk are deduplicated, tagged and stored exactly
like HTTP uploads.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Union

from ..core import (
    get_config,
    get_logger,
    DuplicateContentError,
    ExtractionError,
    ValidationError
)
from ..database import init_schema
from ..extraction import FileScanner
from .ingestion import IngestionCoordinator

logger = get_logger(__name__)


@dataclass
class IndexingStats:
    """Statistics from a bulk indexing run."""
    files_scanned: int = 0
    files_indexed: int = 0
    files_duplicate: int = 0
    files_failed: int = 0
    pages_indexed: int = 0
    errors: List[str] = field(default_factory=list)


class IndexBuilder:
    """
    Ingests every PDF under a directory.

    Individual file failures are recorded and the run continues; an
    unreachable backend stops the run.
    """

    def __init__(
        self,
        source_directory: Union[str, Path],
        uploader_id: str = "indexer",
        reset: bool = False,
        progress_callback: Callable[[int, int, str], None] = None,
        coordinator: IngestionCoordinator = None,
        log_every: int = 50
    ):
        """
        Initialize the index builder.

        Args:
            source_directory: Directory scanned recursively for PDFs.
            uploader_id: Identity recorded as uploader on every document.
            reset: If True, drop the corpus before indexing.
            progress_callback: Optional callback(current, total, filename).
            coordinator: Ingestion coordinator to use.
            log_every: Log a progress line every N files.
        """
        config = get_config()
        self.scanner = FileScanner(
            source_directory,
            extensions=config.extraction.supported_extensions,
            max_file_size_mb=config.extraction.max_file_size_mb
        )
        self.uploader_id = uploader_id
        self.reset = reset
        self.progress_callback = progress_callback
        self.coordinator = coordinator or IngestionCoordinator()
        self.log_every = log_every

    def build(self) -> IndexingStats:
        """
        Run the bulk ingestion.

        Returns:
            IndexingStats with counts and per-file errors.
        """
        stats = IndexingStats()

        logger.info(f"Starting bulk indexing of {self.scanner.root_directory}")

        if self.reset:
            self.coordinator.reset_corpus()
        else:
            init_schema(self.coordinator.repository.client, self.coordinator.repository.index_name)

        pdf_files = list(self.scanner.scan())
        stats.files_scanned = len(pdf_files)

        logger.info(f"Found {stats.files_scanned} PDF files to process")

        for i, filepath in enumerate(pdf_files):
            if self.progress_callback:
                self.progress_callback(i + 1, stats.files_scanned, filepath.name)

            try:
                result = self.coordinator.ingest(
                    filepath.read_bytes(),
                    filepath.name,
                    self.uploader_id
                )
                stats.files_indexed += 1
                stats.pages_indexed += len(result.document.pages)

            except DuplicateContentError:
                stats.files_duplicate += 1
                logger.debug(f"Already indexed: {filepath.name}")

            except (ExtractionError, ValidationError) as e:
                stats.files_failed += 1
                error_msg = f"{filepath.name}: {e.message}"
                stats.errors.append(error_msg)
                logger.warning(f"Failed to ingest: {error_msg}")

            except OSError as e:
                stats.files_failed += 1
                error_msg = f"{filepath.name}: {e}"
                stats.errors.append(error_msg)
                logger.warning(f"Cannot read file: {error_msg}")

            if (i + 1) % self.log_every == 0:
                logger.info(
                    f"Progress: {i + 1}/{stats.files_scanned} files "
                    f"({stats.files_indexed} indexed, {stats.files_failed} failed)"
                )

        logger.info(
            f"Indexing complete: {stats.files_indexed} files indexed, "
            f"{stats.pages_indexed} pages, {stats.files_duplicate} duplicates, "
            f"{stats.files_failed} failures"
        )
        return stats
