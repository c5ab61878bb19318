"""
Custom exception hierarchy for the PDF Search Service.

Each failure mode of the ingestion and search pipeline has its own type so
the HTTP layer can map it to a response code: invalid input, duplicate
content, unreadable PDFs, missing records or blobs, unreachable backends,
and index/cache inconsistencies.
"""


class PDFSearchError(Exception):
    """Base exception for all PDF Search Service errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(PDFSearchError):
    """Raised when configuration is invalid or missing."""
    pass


class ValidationError(PDFSearchError):
    """Raised when a request carries unusable input (empty upload, wrong type)."""
    pass


class ExtractionError(PDFSearchError):
    """Raised when PDF text extraction fails."""

    def __init__(self, message: str, filepath: str = None, details: dict = None):
        """
        Initialize extraction error.

        Args:
            message: Error description.
            filepath: Path to the problematic PDF file.
            details: Additional context.
        """
        super().__init__(message, details)
        self.filepath = filepath


class DuplicateContentError(PDFSearchError):
    """Raised when an upload matches an already indexed document."""

    def __init__(self, message: str, existing_id: str = None, details: dict = None):
        """
        Initialize duplicate error.

        Args:
            message: Error description.
            existing_id: Identifier of the document already in the index.
            details: Additional context.
        """
        super().__init__(message, details)
        self.existing_id = existing_id


class DocumentNotFoundError(PDFSearchError):
    """Raised when the search backend has no record for a document id."""

    def __init__(self, message: str, document_id: str = None, details: dict = None):
        super().__init__(message, details)
        self.document_id = document_id


class BlobNotFoundError(PDFSearchError):
    """Raised when a document record exists but its stored file is gone."""

    def __init__(self, message: str, path: str = None, details: dict = None):
        super().__init__(message, details)
        self.path = path


class BackendUnavailableError(PDFSearchError):
    """
    Raised when a networked collaborator cannot be reached.

    The backend attribute names the failing collaborator ("search", "cache"
    or "storage") so callers can decide whether to degrade or fail.
    """

    def __init__(self, message: str, backend: str = None, details: dict = None):
        """
        Initialize backend error.

        Args:
            message: Error description.
            backend: Name of the unavailable collaborator.
            details: Additional context.
        """
        super().__init__(message, details)
        self.backend = backend


class InconsistentStateError(PDFSearchError):
    """Raised when the index was written but the cache version bump failed."""

    def __init__(self, message: str, document_id: str = None, details: dict = None):
        super().__init__(message, details)
        self.document_id = document_id
