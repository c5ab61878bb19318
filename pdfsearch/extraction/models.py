"""
Data models produced by the extraction backends.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class PageText:
    """Text of a single physical page, 1-indexed."""
    page_number: int
    text: str


@dataclass(frozen=True)
class PdfMetadata:
    """Document-intrinsic metadata read from the PDF info dictionary."""
    author: Optional[str] = None
    created_at: Optional[datetime] = None
    page_count: int = 0


@dataclass
class ExtractedDocument:
    """
    Full extraction result for one PDF.

    Attributes:
        pages: Every physical page in order, text empty when none was found.
        metadata: Info-dictionary metadata.
        backend: Name of the backend that produced the pages.
    """
    pages: List[PageText] = field(default_factory=list)
    metadata: PdfMetadata = field(default_factory=PdfMetadata)
    backend: str = ""

    @property
    def full_text(self) -> str:
        """All page texts joined with newlines, in page order."""
        return "\n".join(page.text for page in self.pages)

    @classmethod
    def from_tuples(
        cls,
        pages: List[Tuple[int, str]],
        metadata: PdfMetadata,
        backend: str
    ) -> "ExtractedDocument":
        """Build from the (page_number, text) tuples returned by a backend."""
        return cls(
            pages=[PageText(page_number=num, text=text) for num, text in pages],
            metadata=metadata,
            backend=backend
        )
