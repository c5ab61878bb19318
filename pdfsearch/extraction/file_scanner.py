"""
File scanner for recursive PDF discovery.

Feeds bulk ingestion with generator-based iteration over a directory tree,
filtering by extension and the configured maximum upload size.
"""

from pathlib import Path
from typing import Iterator, List, Union

from ..core import get_config, get_logger
from ..utils import get_file_size_mb

logger = get_logger(__name__)


class FileScanner:
    """
    Recursively discovers PDF files in a directory tree.

    Uses generator-based iteration for memory efficiency when
    processing large collections.
    """

    def __init__(
        self,
        root_directory: Union[str, Path],
        extensions: List[str] = None,
        max_file_size_mb: float = None
    ):
        """
        Initialize the file scanner.

        Args:
            root_directory: Directory to scan.
            extensions: List of file extensions to include (e.g., [".pdf"]).
            max_file_size_mb: Skip files larger than this size.
        """
        config = get_config()

        self.root_directory = Path(root_directory)
        self.extensions = [
            ext.lower() for ext in (extensions or config.extraction.supported_extensions)
        ]
        self.max_file_size_mb = max_file_size_mb or config.extraction.max_file_size_mb

    def scan(self) -> Iterator[Path]:
        """
        Scan directory and yield matching file paths in sorted order.

        Yields:
            Path objects for each matching file.
        """
        if not self.root_directory.exists():
            logger.error(f"Root directory does not exist: {self.root_directory}")
            return

        logger.info(f"Scanning directory: {self.root_directory}")

        file_count = 0
        skipped_size = 0

        for filepath in sorted(self.root_directory.rglob("*")):
            if not filepath.is_file():
                continue

            if filepath.suffix.lower() not in self.extensions:
                continue

            try:
                size_mb = get_file_size_mb(filepath)
            except OSError as e:
                logger.warning(f"Cannot access file {filepath}: {e}")
                continue

            if size_mb > self.max_file_size_mb:
                logger.debug(f"Skipping large file ({size_mb}MB): {filepath.name}")
                skipped_size += 1
                continue

            file_count += 1
            yield filepath

        logger.info(
            f"Scan complete: {file_count} files found, "
            f"{skipped_size} skipped (too large)"
        )
