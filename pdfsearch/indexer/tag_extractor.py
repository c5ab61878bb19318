"""
Frequency-based tag extraction.

Tags are the most frequent significant words of a document: lowercased,
letters only (accented letters included), short words and stop words
dropped, ties broken by first occurrence.
"""

import re
from collections import Counter
from typing import AbstractSet, List

from ..core import get_config
from .stop_words import DEFAULT_STOP_WORDS


# Anything that is not a letter: punctuation, digits, underscore, whitespace
NON_LETTER_RUN = re.compile(r"[\W\d_]+")


def tokenize(text: str) -> List[str]:
    """Lowercase and split text into letter-only tokens."""
    if not text:
        return []
    return NON_LETTER_RUN.sub(" ", text.lower()).split()


def extract_tags(
    text: str,
    limit: int = 20,
    stop_words: AbstractSet[str] = DEFAULT_STOP_WORDS,
    min_length: int = 3
) -> List[str]:
    """
    Derive the most frequent significant terms of a text.

    Args:
        text: Extracted document text.
        limit: Maximum number of tags returned.
        stop_words: Words never returned as tags.
        min_length: Shortest token kept.

    Returns:
        Tags ordered by descending frequency, first occurrence first on ties.
    """
    if limit <= 0:
        return []

    counts = Counter(
        token for token in tokenize(text)
        if len(token) >= min_length and token not in stop_words
    )

    # Counter keeps first-insertion order and sorted() is stable
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)

    return [term for term, _ in ranked[:limit]]


class TagExtractor:
    """Tag extraction bound to the configured limit and minimum length."""

    def __init__(
        self,
        limit: int = None,
        min_length: int = None,
        stop_words: AbstractSet[str] = DEFAULT_STOP_WORDS
    ):
        config = get_config()
        self.limit = limit if limit is not None else config.tags.limit
        self.min_length = min_length if min_length is not None else config.tags.min_length
        self.stop_words = stop_words

    def extract(self, text: str) -> List[str]:
        """Extract tags from text with this extractor's settings."""
        return extract_tags(
            text,
            limit=self.limit,
            stop_words=self.stop_words,
            min_length=self.min_length
        )
