"""
Tests for frequency-based tag extraction.
"""

from pdfsearch.indexer.stop_words import DEFAULT_STOP_WORDS
from pdfsearch.indexer.tag_extractor import TagExtractor, extract_tags, tokenize


class TestTokenize:
    """Tests for tokenize."""

    def test_lowercases_and_splits_on_non_letters(self):
        assert tokenize("Hello, World! 2024_report") == ["hello", "world", "report"]

    def test_keeps_accented_letters(self):
        assert tokenize("Café Élève") == ["café", "élève"]

    def test_empty(self):
        assert tokenize("") == []
        assert tokenize(None) == []


class TestExtractTags:
    """Tests for extract_tags."""

    def test_greeting_sample(self):
        tags = extract_tags("Bonjour elasticsearch. Bonjour pdf. Auteur X.")

        assert tags[0] == "bonjour"
        assert {"bonjour", "elasticsearch", "auteur"} <= set(tags)
        assert "x" not in tags

    def test_orders_by_frequency_then_first_occurrence(self):
        text = "gamma alpha beta alpha beta delta"

        assert extract_tags(text) == ["alpha", "beta", "gamma", "delta"]

    def test_drops_short_tokens_and_stop_words(self):
        tags = extract_tags("le la les et un une document de la mairie")

        assert tags == ["document", "mairie"]

    def test_limit(self):
        text = " ".join(f"word{chr(97 + i)}ing" for i in range(26))

        tags = extract_tags(text, limit=5)

        assert len(tags) == 5

    def test_zero_limit(self):
        assert extract_tags("plenty of words here", limit=0) == []

    def test_empty_text(self):
        assert extract_tags("") == []

    def test_deterministic(self):
        text = "zeta eta theta zeta iota eta"

        assert extract_tags(text) == extract_tags(text)

    def test_custom_stop_words(self):
        assert extract_tags("apple banana apple", stop_words={"apple"}) == ["banana"]


class TestTagExtractor:
    """Tests for the configured wrapper."""

    def test_uses_configured_settings(self, configured):
        extractor = TagExtractor()

        assert extractor.limit == 20
        assert extractor.min_length == 3
        assert extractor.stop_words is DEFAULT_STOP_WORDS

    def test_overrides(self, configured):
        extractor = TagExtractor(limit=1)

        assert extractor.extract("one two two three") == ["two"]
