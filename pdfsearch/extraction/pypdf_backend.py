"""
pypdf-based text extraction backend.

Fast extraction suitable for most standard PDF files.
Handles encryption detection and empty password decryption, and reads
author and creation date from the document information dictionary.
"""

from pathlib import Path
from typing import List, Tuple, Union

from pypdf import PdfReader

from ..core import get_logger, ExtractionError
from .models import PdfMetadata

logger = get_logger(__name__)


class PyPDFBackend:
    """
    PDF text extraction using the pypdf library.

    Provides fast extraction for standard PDFs with basic
    encryption handling.
    """

    name = "pypdf2"

    def _open(self, filepath: Path) -> PdfReader:
        """Open a reader, decrypting with an empty password when needed."""
        reader = PdfReader(filepath)

        if reader.is_encrypted:
            try:
                reader.decrypt("")
            except Exception:
                raise ExtractionError(
                    "PDF is encrypted and cannot be decrypted",
                    filepath=str(filepath)
                )

        return reader

    def extract(self, filepath: Union[str, Path]) -> List[Tuple[int, str]]:
        """
        Extract text from all pages of a PDF.

        Args:
            filepath: Path to the PDF file.

        Returns:
            One (page_number, text) tuple per physical page, 1-indexed.
            Text is empty for pages without extractable text.

        Raises:
            ExtractionError: If extraction fails completely.
        """
        filepath = Path(filepath)
        results = []

        try:
            reader = self._open(filepath)

            logger.debug(f"Processing {len(reader.pages)} pages: {filepath.name}")

            for page_num, page in enumerate(reader.pages, start=1):
                text = ""
                try:
                    text = page.extract_text() or ""
                except Exception as e:
                    logger.warning(
                        f"Failed to extract page {page_num} from {filepath.name}: {e}"
                    )

                if not text.strip():
                    logger.debug(f"Empty page {page_num} in {filepath.name}")
                results.append((page_num, text))

        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(
                f"PyPDF extraction failed: {e}",
                filepath=str(filepath)
            )

        return results

    def extract_metadata(self, filepath: Union[str, Path]) -> PdfMetadata:
        """
        Read author, creation date and page count.

        Malformed date strings yield None instead of failing extraction.

        Args:
            filepath: Path to the PDF file.

        Returns:
            PdfMetadata for the document.
        """
        filepath = Path(filepath)

        try:
            reader = self._open(filepath)
            info = reader.metadata
            page_count = len(reader.pages)
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(
                f"Failed to read metadata: {e}",
                filepath=str(filepath)
            )

        if info is None:
            return PdfMetadata(page_count=page_count)

        try:
            created_at = info.creation_date
        except Exception as e:
            logger.debug(f"Unparseable creation date in {filepath.name}: {e}")
            created_at = None

        return PdfMetadata(
            author=info.author,
            created_at=created_at,
            page_count=page_count
        )
