"""
Text utility functions for the PDF Search Service.

Provides cleaning of extracted page text and normalization of
highlighted excerpts returned by the search backend.
"""

import re
import unicodedata


SOFT_HYPHEN = "\u00ad"


def clean_text(text: str) -> str:
    """
    Normalize and clean extracted text.

    Removes control characters, normalizes whitespace, and handles
    common PDF extraction artifacts.

    Args:
        text: Raw text from PDF extraction.

    Returns:
        Cleaned text string.
    """
    if not text:
        return ""

    text = unicodedata.normalize("NFKC", text)

    # Remove control characters except newlines and tabs
    text = "".join(
        char for char in text
        if not unicodedata.category(char).startswith("C")
        or char in "\n\t"
    )

    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)

    lines = [line.strip() for line in text.split("\n")]
    text = "\n".join(lines)

    return text.strip()


def normalize_excerpt(fragment: str) -> str:
    """
    Normalize a highlighted fragment for display and deduplication.

    Soft hyphens and line-break hyphenation left by PDF extraction are
    removed, internal whitespace is collapsed and the result is trimmed.
    Highlight markers are kept untouched.

    Args:
        fragment: Raw fragment from the search backend.

    Returns:
        Normalized fragment, empty string for empty input.
    """
    if not fragment:
        return ""

    fragment = fragment.replace(SOFT_HYPHEN, "")
    fragment = re.sub(r"(\w)-\s*\n\s*(\w)", r"\1\2", fragment)
    fragment = re.sub(r"\s+", " ", fragment)

    return fragment.strip()
