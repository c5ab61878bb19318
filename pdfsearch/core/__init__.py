"""
Core module providing foundational components.

This module contains the configuration loader, centralized logging setup,
audit event helpers, and the custom exception hierarchy. It has no internal
dependencies.
"""

from .config_loader import get_config, reload_config, Config
from .logger import get_logger
from .exceptions import (
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

__all__ = [
    "get_config",
    "reload_config",
    "Config",
    "get_logger",
    "PDFSearchError",
    "ConfigurationError",
    "ValidationError",
    "ExtractionError",
    "DuplicateContentError",
    "DocumentNotFoundError",
    "BlobNotFoundError",
    "BackendUnavailableError",
    "InconsistentStateError"
]
