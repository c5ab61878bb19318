"""
PDF extraction module for the PDF Search Service.

Provides per-page text and metadata extraction with multiple backends
(pypdf and pdfplumber) with automatic fallback support, plus file
discovery for bulk ingestion.
"""

from .file_scanner import FileScanner
from .models import PageText, PdfMetadata, ExtractedDocument
from .pypdf_backend import PyPDFBackend
from .pdfplumber_backend import PDFPlumberBackend, parse_pdf_date
from .extractor import PDFExtractor

__all__ = [
    "FileScanner",
    "PageText",
    "PdfMetadata",
    "ExtractedDocument",
    "PyPDFBackend",
    "PDFPlumberBackend",
    "parse_pdf_date",
    "PDFExtractor"
]
