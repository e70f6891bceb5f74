"""Tests for word-set Jaccard similarity and past-email ranking."""

import pytest

from replydesk.lib.similarity import jaccard_similarity, rank_similar, word_set


class TestWordSet:
    def test_lowercases_and_splits_on_non_word_characters(self):
        assert word_set("Park-connector, PARK connector!") == {"park", "connector"}

    def test_empty_text(self):
        assert word_set("") == set()
        assert word_set(None) == set()


class TestJaccardSimilarity:
    def test_identical_text(self):
        assert jaccard_similarity("new bus stop", "New bus stop.") == 1.0

    def test_partial_overlap(self):
        # {a, b, c} vs {b, c, d}: 2 shared of 4
        assert jaccard_similarity("a b c", "b c d") == pytest.approx(0.5)

    def test_no_overlap(self):
        assert jaccard_similarity("hawker centre", "cycling path") == 0.0

    def test_both_empty(self):
        assert jaccard_similarity("", "   ") == 0.0


class TestRankSimilar:
    def test_best_first_and_limited(self):
        candidates = ["a b c d", "a b x y", "a x y z", "q r s t"]

        matches = rank_similar("a b c e", candidates, text_of=lambda c: c, limit=2)

        assert [m.item for m in matches] == ["a b c d", "a b x y"]
        assert matches[0].similarity > matches[1].similarity

    def test_exact_duplicates_are_excluded(self):
        matches = rank_similar("same words", ["same words", "same other"], text_of=lambda c: c)

        assert [m.item for m in matches] == ["same other"]

    def test_non_matching_candidates_are_kept(self):
        matches = rank_similar("alpha", ["beta"], text_of=lambda c: c)

        assert len(matches) == 1
        assert matches[0].similarity == 0.0
