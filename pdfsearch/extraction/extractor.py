"""
Unified PDF extraction interface with automatic fallback.

Wraps multiple extraction backends and attempts fallback when
the primary backend fails or finds no text. Produces the
page texts and metadata consumed by the ingestion pipeline.
"""

from pathlib import Path
from typing import Union

from ..core import get_config, get_logger, ExtractionError
from ..utils import clean_text
from .models import ExtractedDocument, PdfMetadata
from .pypdf_backend import PyPDFBackend
from .pdfplumber_backend import PDFPlumberBackend

logger = get_logger(__name__)


BACKENDS = {
    "pypdf2": PyPDFBackend,
    "pdfplumber": PDFPlumberBackend
}


class PDFExtractor:
    """
    Unified PDF extraction with automatic backend fallback.

    Tries the primary backend first, falls back to secondary
    if extraction fails or produces empty results.
    """

    def __init__(
        self,
        primary_backend: str = None,
        fallback_backend: str = None
    ):
        """
        Initialize the extractor with configured backends.

        Args:
            primary_backend: Name of primary backend ("pypdf2" or "pdfplumber").
            fallback_backend: Name of fallback backend.
        """
        config = get_config()

        primary_name = primary_backend or config.extraction.primary_backend
        fallback_name = fallback_backend or config.extraction.fallback_backend

        if primary_name not in BACKENDS:
            raise ExtractionError(f"Unknown backend: {primary_name}")

        self.primary = BACKENDS[primary_name]()
        self.fallback = BACKENDS.get(fallback_name, lambda: None)()

        logger.debug(
            f"Initialized extractor: primary={primary_name}, fallback={fallback_name}"
        )

    def extract_document(self, filepath: Union[str, Path]) -> ExtractedDocument:
        """
        Extract cleaned page texts and metadata for ingestion.

        Every physical page is kept, with empty text when it has none, so
        scanned documents are indexed by name and metadata. Metadata is
        read with the backend that produced the pages; a metadata failure
        is logged and yields empty metadata since the pages are usable.

        Args:
            filepath: Path to the PDF file.

        Returns:
            ExtractedDocument with one entry per page.

        Raises:
            ExtractionError: If no backend can read the document.
        """
        filepath = Path(filepath)
        backend, raw_pages = self._extract_with_backend(filepath)

        pages = [(page_num, clean_text(text)) for page_num, text in raw_pages]
        if not any(text for _, text in pages):
            logger.info(f"No extractable text in {filepath.name}, indexing {len(pages)} empty pages")

        try:
            metadata = backend.extract_metadata(filepath)
        except ExtractionError as e:
            logger.warning(f"Metadata unavailable for {filepath.name}: {e.message}")
            metadata = PdfMetadata(page_count=len(raw_pages))

        return ExtractedDocument.from_tuples(pages, metadata, backend.name)

    def _extract_with_backend(self, filepath: Path):
        """
        Run primary then fallback; return (backend, pages).

        The fallback is tried when the primary fails or finds no text. If
        neither finds text, the first page list obtained is returned.
        """
        primary_error = None
        blank = None

        try:
            results = self.primary.extract(filepath)

            if _has_text(results):
                return self.primary, results

            logger.debug(f"Primary backend found no text: {filepath.name}")
            if results:
                blank = (self.primary, results)

        except ExtractionError as e:
            primary_error = e
            logger.debug(f"Primary backend failed: {e.message}")

        if self.fallback:
            try:
                logger.debug(f"Trying fallback backend for: {filepath.name}")
                results = self.fallback.extract(filepath)

                if _has_text(results):
                    return self.fallback, results
                if results and blank is None:
                    blank = (self.fallback, results)

            except ExtractionError as e:
                logger.debug(f"Fallback backend also failed: {e.message}")

        if blank is not None:
            return blank

        if primary_error:
            raise primary_error

        raise ExtractionError(
            "Document has no pages",
            filepath=str(filepath)
        )


def _has_text(pages) -> bool:
    return any(clean_text(text) for _, text in pages or [])
