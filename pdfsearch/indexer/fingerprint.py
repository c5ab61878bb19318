"""
Content fingerprinting for upload deduplication.

A fingerprint is the SHA-256 of the extracted text together with the
document author and byte size. Two uploads with equal fingerprints are
the same document.
"""

import hashlib
from dataclasses import dataclass
from typing import Optional


UNKNOWN_AUTHOR = "unknown"


@dataclass(frozen=True)
class Fingerprint:
    """Deduplication key of a document."""
    content_hash: str
    author: str
    byte_size: int

    @property
    def document_id(self) -> str:
        """Deterministic index id derived from all three components."""
        key = f"{self.content_hash}|{self.author}|{self.byte_size}"
        return hashlib.sha256(key.encode("utf-8")).hexdigest()


def normalize_author(author: Optional[str]) -> str:
    """Strip an author string, falling back to the unknown sentinel."""
    if author is None:
        return UNKNOWN_AUTHOR
    author = str(author).strip()
    return author or UNKNOWN_AUTHOR


def compute_content_hash(text: str) -> str:
    """SHA-256 hex digest of UTF-8 text. Empty text is hashed like any other."""
    return hashlib.sha256((text or "").encode("utf-8")).hexdigest()


def compute_fingerprint(text: str, author: Optional[str], byte_size: int) -> Fingerprint:
    """
    Compute the deduplication fingerprint of a document.

    Args:
        text: Extracted full text.
        author: Author from the PDF metadata, None when absent.
        byte_size: Size of the uploaded file in bytes.

    Returns:
        Fingerprint triple.
    """
    return Fingerprint(
        content_hash=compute_content_hash(text),
        author=normalize_author(author),
        byte_size=int(byte_size)
    )
