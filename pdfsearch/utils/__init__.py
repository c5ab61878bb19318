"""
Utility module providing shared helper functions.

Contains file naming and text processing utilities used across
the application. Depends only on the standard library.
"""

from .file_utils import (
    sanitize_filename,
    generate_stored_name,
    get_file_size_mb,
    ensure_directory
)
from .text_utils import (
    clean_text,
    normalize_excerpt
)

__all__ = [
    "sanitize_filename",
    "generate_stored_name",
    "get_file_size_mb",
    "ensure_directory",
    "clean_text",
    "normalize_excerpt"
]
