"""
Tests for custom exception classes.

Tests exception creation, message formatting, and details handling.
"""

import pytest

from pdfsearch.core.exceptions import (
    PDFSearchError,
    ConfigurationError,
    ValidationError,
    ExtractionError,
    DuplicateContentError,
    DocumentNotFoundError,
    BlobNotFoundError,
    BackendUnavailableError,
    InconsistentStateError
)


class TestPDFSearchError:
    """Tests for base PDFSearchError."""

    def test_basic_creation(self):
        """Test creating exception with just a message."""
        error = PDFSearchError("Something went wrong")

        assert error.message == "Something went wrong"
        assert error.details == {}
        assert str(error) == "Something went wrong"

    def test_creation_with_details(self):
        """Test creating exception with details dict."""
        error = PDFSearchError(
            "File error",
            {"filename": "test.pdf", "size": 1024}
        )

        assert error.details["filename"] == "test.pdf"
        assert error.details["size"] == 1024

    @pytest.mark.parametrize("exc_type", [
        ConfigurationError,
        ValidationError,
        ExtractionError,
        DuplicateContentError,
        DocumentNotFoundError,
        BlobNotFoundError,
        BackendUnavailableError,
        InconsistentStateError
    ])
    def test_every_error_is_catchable_as_base(self, exc_type):
        """Every service error can be caught as PDFSearchError."""
        with pytest.raises(PDFSearchError):
            raise exc_type("failure")


class TestExtractionError:
    """Tests for ExtractionError."""

    def test_with_filepath_and_details(self):
        """Test ExtractionError with filepath and details."""
        error = ExtractionError(
            "Failed to extract",
            filepath="/test.pdf",
            details={"backend": "pypdf2"}
        )

        assert error.filepath == "/test.pdf"
        assert error.details["backend"] == "pypdf2"


class TestDuplicateContentError:
    """Tests for DuplicateContentError."""

    def test_carries_existing_id(self):
        """The id of the already indexed document is kept."""
        error = DuplicateContentError("File already indexed", existing_id="abc")

        assert error.existing_id == "abc"
        assert error.message == "File already indexed"


class TestNotFoundErrors:
    """Tests for the two not-found errors."""

    def test_document_not_found_keeps_id(self):
        error = DocumentNotFoundError("Document not found", document_id="d1")

        assert error.document_id == "d1"

    def test_blob_not_found_keeps_path(self):
        error = BlobNotFoundError("File not found", path="/blobs/x.pdf")

        assert error.path == "/blobs/x.pdf"
        assert not isinstance(error, DocumentNotFoundError)


class TestBackendErrors:
    """Tests for backend and consistency errors."""

    def test_backend_unavailable_names_backend(self):
        error = BackendUnavailableError("Down", backend="cache", details={"status": 503})

        assert error.backend == "cache"
        assert error.details["status"] == 503

    def test_inconsistent_state_keeps_document_id(self):
        error = InconsistentStateError("Bump failed", document_id="d9")

        assert error.document_id == "d9"
