"""Tests for text normalisation and edit distance helpers."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from openloyer.payment.matchers.text import edit_similarity, levenshtein_distance, normalize_text

pytestmark = pytest.mark.unit


class TestNormalizeText:
    """Tests for normalize_text()."""

    def test_lowercases_and_trims(self):
        assert normalize_text("  DUPONT  ") == "dupont"

    def test_strips_accents(self):
        assert normalize_text("Hervé Bézier") == "herve bezier"

    def test_collapses_whitespace_runs(self):
        assert normalize_text("Jean   Pierre\t\nMartin") == "jean pierre martin"

    def test_french_special_characters(self):
        assert normalize_text("François Çédric Ürsula") == "francois cedric ursula"

    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_blank_input_normalizes_to_empty(self, value):
        assert normalize_text(value) == ""

    def test_keeps_punctuation(self):
        """Only case, accents and whitespace are touched."""
        assert normalize_text("SCI Les-Tilleuls / LOT 3B") == "sci les-tilleuls / lot 3b"

    @given(st.text())
    def test_idempotent(self, value):
        once = normalize_text(value)
        assert normalize_text(once) == once

    @given(st.text())
    def test_no_edge_or_double_spaces(self, value):
        result = normalize_text(value)
        assert result == result.strip()
        assert "  " not in result


class TestLevenshtein:
    """Tests for levenshtein_distance() and edit_similarity()."""

    def test_identical_strings(self):
        assert levenshtein_distance("hello", "hello") == 0

    def test_empty_comparison_is_length(self):
        assert levenshtein_distance("hello", "") == 5
        assert levenshtein_distance("", "hello") == 5

    def test_classic_example(self):
        assert levenshtein_distance("kitten", "sitting") == 3

    def test_single_substitution(self):
        assert levenshtein_distance("cat", "car") == 1

    def test_similarity_of_two_empty_strings_is_zero(self):
        assert edit_similarity("", "") == 0.0

    def test_similarity_formula(self):
        # 3 edits over the longer string (7 chars)
        assert edit_similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)

    @given(st.text(max_size=30), st.text(max_size=30))
    def test_similarity_bounded(self, a, b):
        assert 0.0 <= edit_similarity(a, b) <= 1.0
