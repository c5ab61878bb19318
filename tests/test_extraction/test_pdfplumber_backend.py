"""
Tests for the pdfplumber-based extraction backend.

Tests text extraction, metadata, PDF date parsing and error cases using
sample PDF fixtures and mocks.
"""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch, Mock, MagicMock

from pdfsearch.extraction.pdfplumber_backend import PDFPlumberBackend, parse_pdf_date
from pdfsearch.core.exceptions import ExtractionError


@pytest.fixture
def backend():
    """Create a PDFPlumberBackend instance."""
    return PDFPlumberBackend()


def _mock_pdf(pages, metadata=None):
    mock_pdf = MagicMock()
    mock_pdf.pages = pages
    mock_pdf.metadata = metadata
    mock_pdf.__enter__ = Mock(return_value=mock_pdf)
    mock_pdf.__exit__ = Mock(return_value=False)
    return mock_pdf


def _page(text=None, error=None):
    page = Mock()
    if error:
        page.extract_text.side_effect = error
    else:
        page.extract_text.return_value = text
    return page


class TestPDFPlumberBackend:
    """Tests for PDFPlumberBackend class."""

    def test_backend_name(self, backend):
        """Test that backend has correct name identifier."""
        assert backend.name == "pdfplumber"

    def test_extract_nonexistent_file_raises(self, backend, temp_dir):
        """Test that extracting nonexistent file raises ExtractionError."""
        with pytest.raises(ExtractionError):
            backend.extract(temp_dir / "nonexistent.pdf")

    def test_extract_invalid_pdf_raises(self, backend, temp_dir):
        """Test that invalid PDF content raises ExtractionError."""
        invalid_pdf = temp_dir / "invalid.pdf"
        invalid_pdf.write_bytes(b"Not a valid PDF")

        with pytest.raises(ExtractionError):
            backend.extract(invalid_pdf)


class TestPDFPlumberBackendWithMock:
    """Tests using mocked pdfplumber for deterministic behavior."""

    @patch("pdfsearch.extraction.pdfplumber_backend.pdfplumber")
    def test_extract_multiple_pages(self, mock_pdfplumber, backend, sample_pdf):
        """Test extraction of multiple pages."""
        mock_pdfplumber.open.return_value = _mock_pdf(
            [_page("Page one"), _page("Page two"), _page("Page three")]
        )

        results = backend.extract(sample_pdf)

        assert results == [(1, "Page one"), (2, "Page two"), (3, "Page three")]

    @patch("pdfsearch.extraction.pdfplumber_backend.pdfplumber")
    def test_extract_keeps_empty_pages(self, mock_pdfplumber, backend, sample_pdf):
        """Pages without text keep their slot with the raw text."""
        mock_pdfplumber.open.return_value = _mock_pdf(
            [_page("Real content"), _page("   \n  "), _page(None)]
        )

        assert backend.extract(sample_pdf) == [(1, "Real content"), (2, "   \n  "), (3, "")]

    @patch("pdfsearch.extraction.pdfplumber_backend.pdfplumber")
    def test_extract_continues_on_page_error(self, mock_pdfplumber, backend, sample_pdf):
        """Test that a failing page doesn't stop extraction of others."""
        mock_pdfplumber.open.return_value = _mock_pdf(
            [_page("Good content"), _page(error=Exception("Page corrupted")), _page("Good content")]
        )

        results = backend.extract(sample_pdf)

        assert results == [(1, "Good content"), (2, ""), (3, "Good content")]

    @patch("pdfsearch.extraction.pdfplumber_backend.pdfplumber")
    def test_extract_metadata(self, mock_pdfplumber, backend, sample_pdf):
        mock_pdfplumber.open.return_value = _mock_pdf(
            [_page("a")],
            metadata={"Author": "Jean Dupont", "CreationDate": "D:20240315093000Z"}
        )

        metadata = backend.extract_metadata(sample_pdf)

        assert metadata.author == "Jean Dupont"
        assert metadata.created_at == datetime(2024, 3, 15, 9, 30, 0, tzinfo=timezone.utc)
        assert metadata.page_count == 1

    @patch("pdfsearch.extraction.pdfplumber_backend.pdfplumber")
    def test_extract_metadata_without_info(self, mock_pdfplumber, backend, sample_pdf):
        mock_pdfplumber.open.return_value = _mock_pdf([_page("a"), _page("b")], metadata=None)

        metadata = backend.extract_metadata(sample_pdf)

        assert metadata.author is None
        assert metadata.created_at is None
        assert metadata.page_count == 2


class TestParsePdfDate:
    """Tests for parse_pdf_date."""

    def test_full_date_with_positive_offset(self):
        value = parse_pdf_date("D:20240101120000+01'00'")

        assert value == datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone(timedelta(hours=1)))

    def test_negative_offset(self):
        value = parse_pdf_date("D:20240101120000-05'30'")

        assert value.utcoffset() == -timedelta(hours=5, minutes=30)

    def test_date_without_timezone_is_naive(self):
        value = parse_pdf_date("D:20231231")

        assert value == datetime(2023, 12, 31)
        assert value.tzinfo is None

    def test_year_only(self):
        assert parse_pdf_date("D:1999") == datetime(1999, 1, 1)

    @pytest.mark.parametrize("raw", [None, "", "garbage", "D:20241399", 20240101])
    def test_invalid_values_return_none(self, raw):
        assert parse_pdf_date(raw) is None
