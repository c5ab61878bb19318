"""
pdfplumber-based text extraction backend.

Better handling of complex layouts, tables, and multi-column documents.
Slower than pypdf but more accurate for difficult PDFs.
"""

import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional, Tuple, Union

import pdfplumber

from ..core import get_logger, ExtractionError
from .models import PdfMetadata

logger = get_logger(__name__)


# D:YYYYMMDDHHmmSS followed by an optional Z or +HH'mm' offset
PDF_DATE_PATTERN = re.compile(
    r"^D?:?(\d{4})(\d{2})?(\d{2})?(\d{2})?(\d{2})?(\d{2})?"
    r"(?:([Zz+\-])(\d{2})?'?(\d{2})?'?)?"
)


def parse_pdf_date(raw: Optional[str]) -> Optional[datetime]:
    """
    Parse a PDF date string such as "D:20240101120000+01'00'".

    Args:
        raw: Raw value from the info dictionary.

    Returns:
        Parsed datetime, timezone-aware when an offset is present,
        or None when the value is missing or malformed.
    """
    if not raw or not isinstance(raw, str):
        return None

    match = PDF_DATE_PATTERN.match(raw.strip())
    if not match:
        return None

    year, month, day, hour, minute, second, sign, off_h, off_m = match.groups()

    try:
        value = datetime(
            int(year),
            int(month or 1),
            int(day or 1),
            int(hour or 0),
            int(minute or 0),
            int(second or 0)
        )
    except ValueError:
        return None

    if sign in ("Z", "z"):
        return value.replace(tzinfo=timezone.utc)
    if sign in ("+", "-"):
        offset = timedelta(hours=int(off_h or 0), minutes=int(off_m or 0))
        if sign == "-":
            offset = -offset
        return value.replace(tzinfo=timezone(offset))

    return value


class PDFPlumberBackend:
    """
    PDF text extraction using pdfplumber library.

    Provides more accurate extraction for complex layouts
    at the cost of slower processing.
    """

    name = "pdfplumber"

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
            with pdfplumber.open(filepath) as pdf:
                logger.debug(f"Processing {len(pdf.pages)} pages: {filepath.name}")

                for page_num, page in enumerate(pdf.pages, start=1):
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

        except Exception as e:
            raise ExtractionError(
                f"pdfplumber extraction failed: {e}",
                filepath=str(filepath)
            )

        return results

    def extract_metadata(self, filepath: Union[str, Path]) -> PdfMetadata:
        """
        Read author, creation date and page count.

        Args:
            filepath: Path to the PDF file.

        Returns:
            PdfMetadata for the document.
        """
        filepath = Path(filepath)

        try:
            with pdfplumber.open(filepath) as pdf:
                info = pdf.metadata or {}
                page_count = len(pdf.pages)
        except Exception as e:
            raise ExtractionError(
                f"Failed to read metadata: {e}",
                filepath=str(filepath)
            )

        author = info.get("Author")
        if isinstance(author, bytes):
            author = author.decode("utf-8", errors="ignore")

        return PdfMetadata(
            author=author if isinstance(author, str) else None,
            created_at=parse_pdf_date(info.get("CreationDate")),
            page_count=page_count
        )
