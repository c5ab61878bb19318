"""
File utility functions for the PDF Search Service.

Provides filename sanitizing, collision-resistant stored names,
size calculations, and directory management.
"""

import re
import secrets
import time
from pathlib import Path
from typing import Union


UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.\-]+")


def sanitize_filename(name: str, default: str = "document.pdf") -> str:
    """
    Reduce a user-supplied filename to a safe basename.

    Directory components are dropped and runs of characters outside
    letters, digits, dot, dash and underscore become a single underscore.

    Args:
        name: Original filename as sent by the client.
        default: Name used when nothing usable remains.

    Returns:
        Sanitized filename.
    """
    basename = Path((name or "").replace("\\", "/")).name
    cleaned = UNSAFE_FILENAME_CHARS.sub("_", basename).strip("._")
    return cleaned or default


def generate_stored_name(original_name: str) -> str:
    """
    Build a unique storage name from time, randomness and the original name.

    The random component keeps names distinct when the same file name is
    uploaded several times within the same millisecond.

    Args:
        original_name: User-supplied filename.

    Returns:
        Name of the form "<epoch ms>-<12 hex chars>-<sanitized name>".
    """
    millis = int(time.time() * 1000)
    return f"{millis}-{secrets.token_hex(6)}-{sanitize_filename(original_name)}"


def get_file_size_mb(filepath: Union[str, Path]) -> float:
    """
    Get file size in megabytes.

    Args:
        filepath: Path to the file.

    Returns:
        File size in MB, rounded to 2 decimal places.
    """
    size_bytes = Path(filepath).stat().st_size
    return round(size_bytes / (1024 * 1024), 2)


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Create directory tree if it doesn't exist.

    Args:
        path: Directory path to create.

    Returns:
        Path object of the directory.
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path
