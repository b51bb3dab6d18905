"""Unit tests for relevance scoring."""

from functools import cmp_to_key

import pytest
from phonetic_search.core.ranker import Ranker, compare_scored


class TestRanker:
    """Test cases for the Ranker class."""

    @pytest.fixture
    def ranker(self):
        """Create a ranker instance for testing."""
        return Ranker()

    def test_score_components(self, ranker):
        """Substring, token and code bonuses add up."""
        score = ranker.score_title("Fast Fourier Transform", "fourier", ["fourier"], ["frr"])

        # 100 substring + (20 + 40 // 3) token + (5 + 10 // 3) code
        assert score == 100 + 33 + 8

    def test_substring_bonus_is_case_insensitive(self, ranker):
        """The containment check really compares against the lowercased query."""
        with_bonus = ranker.score_title("Fourier", "FOURIER", [], [])
        without_bonus = ranker.score_title("Fourier", "laplace", [], [])

        assert with_bonus == 100
        assert without_bonus == 0

    def test_phonetic_only_match(self, ranker):
        """A misspelled query scores through its phonetic code alone."""
        score = ranker.score_title("Fast Fourier Transform", "furier", ["furier"], ["frr"])
        assert score == 5 + 10 // 3

    def test_shorter_titles_score_higher_per_token(self, ranker):
        short = ranker.score_title("Fourier", "x", ["fourier"], [])
        long = ranker.score_title("Notes on Fourier Analysis", "x", ["fourier"], [])

        assert short == 20 + 40
        assert long == 20 + 10
        assert short > long

    def test_repeated_title_tokens_each_count(self, ranker):
        score = ranker.score_title("Fourier Fourier", "x", ["fourier"], [])
        assert score == 2 * (20 + 20)

    def test_missing_title(self, ranker):
        assert ranker.score_title(None, "fourier", ["fourier"], ["frr"]) == 0

    def test_exact_title_outranks_single_code(self, ranker):
        """An exact title match scores at least as high as one shared code."""
        query = "Fourier Transform"
        tokens = ["fourier", "transform"]
        codes = ["frr", "trnsfrm"]

        exact = ranker.score_title("Fourier Transform", query, tokens, codes)
        one_code = ranker.score_title("Furier Notes", query, tokens, codes)

        assert exact == 100 + 2 * 40 + 2 * 10
        assert one_code == 5 + 10 // 2
        assert exact >= one_code

    def test_rank_orders_by_descending_score(self, ranker):
        titles = {0: "Furier Notes", 1: "Fourier Transform", 2: "Fourier"}
        ranked = ranker.rank(
            [0, 1, 2], titles.get, "fourier transform", ["fourier", "transform"], ["frr", "trnsfrm"]
        )

        assert [entry_id for entry_id, _ in ranked] == [1, 2, 0]
        scores = [score for _, score in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_rank_empty(self, ranker):
        assert ranker.rank([], lambda entry_id: None, "q", ["q"], []) == []


class TestCompareScored:
    """The comparator treats ties as 'first before second' from both sides."""

    def test_distinct_scores(self):
        assert compare_scored((0, 10), (1, 5)) == -1
        assert compare_scored((1, 5), (0, 10)) == 1

    def test_ties_are_not_symmetric(self):
        """Documented oddity: equal scores are never reported as equal."""
        assert compare_scored((0, 7), (1, 7)) == -1
        assert compare_scored((1, 7), (0, 7)) == -1

    def test_sorting_with_ties_keeps_score_order(self):
        items = [(0, 1), (1, 9), (2, 1), (3, 9), (4, 5)]
        ordered = sorted(items, key=cmp_to_key(compare_scored))

        assert [score for _, score in ordered] == [9, 9, 5, 1, 1]
        assert sorted(entry_id for entry_id, _ in ordered) == [0, 1, 2, 3, 4]
