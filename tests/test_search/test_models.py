"""
Tests for search data models.
"""

import pytest

from pdfsearch.search.models import (
    PageHit,
    RawHit,
    SearchPage,
    SearchRequest,
    SearchResultItem,
    Snippet,
    compute_total_pages
)


class TestComputeTotalPages:
    """Tests for compute_total_pages."""

    @pytest.mark.parametrize("total, size, expected", [
        (0, 10, 0),
        (1, 10, 1),
        (10, 10, 1),
        (11, 10, 2),
        (95, 10, 10),
        (5, 0, 0)
    ])
    def test_values(self, total, size, expected):
        assert compute_total_pages(total, size) == expected


class TestSearchRequest:
    """Tests for SearchRequest."""

    def test_to_kwargs(self):
        request = SearchRequest(query={"match_all": {}}, page=3, size=10, offset=20)

        assert request.to_kwargs() == {
            "query": {"match_all": {}},
            "from_": 20,
            "size": 10,
            "source_excludes": ["pages"],
            "track_total_hits": True
        }


class TestRawHit:
    """Tests for parsing backend hits."""

    def test_full_hit(self):
        hit = {
            "_id": "doc-1",
            "_score": 2.5,
            "_source": {"originalName": "a.pdf"},
            "inner_hits": {"pages_matching": {"hits": {"hits": [
                {
                    "_source": {"pageNumber": 5},
                    "highlight": {"pages.text": ["foo <mark>bar</mark> baz"]}
                }
            ]}}}
        }

        raw = RawHit.from_es(hit)

        assert raw.document_id == "doc-1"
        assert raw.score == 2.5
        assert raw.source == {"originalName": "a.pdf"}
        assert raw.page_hits == (PageHit(5, ("foo <mark>bar</mark> baz",)),)

    def test_page_number_from_nested_offset(self):
        hit = {
            "_id": "doc-1",
            "inner_hits": {"pages_matching": {"hits": {"hits": [
                {"_nested": {"field": "pages", "offset": 3}, "highlight": {}}
            ]}}}
        }

        assert RawHit.from_es(hit).page_hits[0].page_number == 4

    def test_missing_fields_are_empty(self):
        raw = RawHit.from_es({"_id": "doc-1"})

        assert raw.score is None
        assert raw.source == {}
        assert raw.page_hits == ()

    def test_inner_hit_without_page_information(self):
        hit = {"_id": "d", "inner_hits": {"pages_matching": {"hits": {"hits": [{}]}}}}

        assert RawHit.from_es(hit).page_hits == (PageHit(None, ()),)

    def test_hit_without_id_is_dropped(self):
        assert RawHit.from_es({"_score": 1.0}) is None


class TestSerialization:
    """Tests for the public result shapes."""

    def test_item_to_dict(self):
        item = SearchResultItem(
            document_id="doc-1",
            file_name="a.pdf",
            uploaded_at="2024-01-01T00:00:00+00:00",
            author="Alice",
            tags=["budget"],
            score=1.5,
            page_number=5,
            excerpts=["foo <mark>bar</mark> baz"],
            snippets=[Snippet(5, "foo <mark>bar</mark> baz")]
        )

        assert item.to_dict() == {
            "id": "doc-1",
            "fileName": "a.pdf",
            "uploadedAt": "2024-01-01T00:00:00+00:00",
            "author": "Alice",
            "tags": ["budget"],
            "score": 1.5,
            "pageNumber": 5,
            "excerpts": ["foo <mark>bar</mark> baz"],
            "snippets": [{"pageNumber": 5, "snippet": "foo <mark>bar</mark> baz"}]
        }

    def test_empty_page(self):
        page = SearchPage.empty("", 2, 10)

        assert page.to_dict() == {
            "query": "",
            "page": 2,
            "pageSize": 10,
            "total": 0,
            "totalPages": 0,
            "hits": []
        }
