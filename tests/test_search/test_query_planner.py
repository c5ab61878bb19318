"""
Tests for query planning.
"""

import pytest

from pdfsearch.search.query_planner import MAX_RESULT_WINDOW, QueryPlanner, query_terms


@pytest.fixture
def planner(configured) -> QueryPlanner:
    return QueryPlanner()


def _clauses(query):
    return query["bool"]["should"]


class TestQueryTerms:
    """Tests for query_terms."""

    def test_lowercases_and_deduplicates(self):
        assert query_terms("Budget  budget Report") == ["budget", "report"]

    def test_empty(self):
        assert query_terms("") == []


class TestClampPage:
    """Tests for page parameter coercion."""

    @pytest.mark.parametrize("raw, expected", [
        (1, 1),
        (3, 3),
        ("4", 4),
        (0, 1),
        (-2, 1),
        ("abc", 1),
        (None, 1)
    ])
    def test_values(self, raw, expected):
        assert QueryPlanner.clamp_page(raw) == expected


class TestBuildQuery:
    """Tests for the generated query DSL."""

    def test_requires_one_clause(self, planner):
        assert planner.build_query("bar")["bool"]["minimum_should_match"] == 1

    def test_name_clauses_are_boosted(self, planner):
        phrase, exact = _clauses(planner.build_query("Annual Report"))[:2]

        assert phrase["match_phrase"]["originalName"] == {"query": "Annual Report", "boost": 5.0}
        assert exact["term"]["originalName.keyword"] == {"value": "Annual Report", "boost": 5.0}

    def test_tags_clause(self, planner):
        tags = _clauses(planner.build_query("Budget report budget"))[2]

        assert tags["terms"] == {"tags": ["budget", "report"], "boost": 2.0}

    def test_nested_pages_clause(self, planner):
        nested = _clauses(planner.build_query("bar"))[3]["nested"]

        assert nested["path"] == "pages"
        assert nested["score_mode"] == "max"
        assert nested["query"] == {"match": {"pages.text": "bar"}}

        inner_hits = nested["inner_hits"]
        assert inner_hits["name"] == "pages_matching"
        assert inner_hits["size"] == 3
        assert inner_hits["_source"] == ["pages.pageNumber"]

        highlight = inner_hits["highlight"]
        assert highlight["fields"]["pages.text"] == {"fragment_size": 140, "number_of_fragments": 3}
        assert highlight["pre_tags"] == ["<mark>"]
        assert highlight["post_tags"] == ["</mark>"]


class TestPlan:
    """Tests for QueryPlanner.plan."""

    def test_first_page(self, planner):
        request = planner.plan("bar")

        assert request.page == 1
        assert request.size == 10
        assert request.offset == 0
        assert request.source_excludes == ("pages",)
        assert request.track_total_hits is True

    def test_offset_follows_page(self, planner):
        assert planner.plan("bar", 3).offset == 20

    def test_last_page_inside_window(self, planner):
        request = planner.plan("bar", MAX_RESULT_WINDOW // 10)

        assert request.offset + request.size == MAX_RESULT_WINDOW
        assert request.size == 10

    def test_page_past_window_fetches_no_hits(self, planner):
        request = planner.plan("bar", 5000)

        assert request.page == 5000
        assert request.size == 0
        assert request.offset == 0

    def test_invalid_page_is_clamped(self, planner):
        request = planner.plan("bar", "-5")

        assert request.page == 1
        assert request.offset == 0

    def test_text_is_stripped(self, planner):
        request = planner.plan("  bar  ")

        assert _clauses(request.query)[3]["nested"]["query"] == {"match": {"pages.text": "bar"}}

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_blank_text_plans_nothing(self, planner, text):
        assert planner.plan(text) is None
