"""
Tests for archive/search.py -- case-insensitive substring filter.
"""

import pytest

from archive.search import filter_entities, is_blank


@pytest.fixture
def entities(sample_store):
    return sample_store.entities


def _ids(entities):
    return [e.id for e in entities]


class TestIsBlank:
    @pytest.mark.parametrize("query", ["", "   ", "\t\n", None])
    def test_blank(self, query):
        assert is_blank(query)

    def test_not_blank(self):
        assert not is_blank(" a ")


class TestFilter:
    def test_blank_returns_everything(self, entities):
        assert _ids(filter_entities(entities, "  ")) == _ids(entities)

    def test_matches_name_case_insensitive(self, entities):
        assert _ids(filter_entities(entities, "IDA B")) == ["ida-wells"]

    def test_matches_summary(self, entities):
        assert _ids(filter_entities(entities, "segregated")) == ["montgomery"]

    def test_matches_key_term(self, entities):
        assert _ids(filter_entities(entities, "pan-african")) == ["du-bois"]

    def test_match_in_several_fields_counted_once(self, entities):
        # "Du Bois" is in a name, a summary and a key term
        result = _ids(filter_entities(entities, "du bois"))
        assert result == ["niagara", "du-bois"]

    def test_keeps_collection_order(self, entities):
        result = _ids(filter_entities(entities, "civil rights"))
        assert result == ["niagara"]
        result = _ids(filter_entities(entities, "o"))
        assert result == [e for e in _ids(entities) if e in result]

    def test_surrounding_whitespace_ignored(self, entities):
        assert _ids(filter_entities(entities, "  boycott  ")) == ["montgomery"]

    def test_no_match(self, entities):
        assert filter_entities(entities, "zzzz") == []

    def test_does_not_search_detail_or_dates(self, entities):
        assert filter_entities(entities, "NAACP <b>") == []
        assert filter_entities(entities, "1905") == []
