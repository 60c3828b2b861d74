# tests/test_distance.py
from unittest.mock import patch

import pytest

from interventions.errors import InvalidArgumentError
from interventions.scoring.distance import StringDistance, levenshtein
from test_utils import announce

WORDS = ["", "a", "banana", "banan", "bana", "vanilla", "kitten", "sitting", "aardvark", "ardvark"]


class TestLevenshtein:

    @pytest.mark.parametrize(
        "word1, word2, expected",
        [
            ("kitten", "sitting", 3),
            ("banan", "banana", 1),
            ("bana", "banana", 2),
            ("banna", "banana", 1),
            ("ardvark", "aardvark", 1),
            ("al", "ap", 1),
            ("flaw", "lawn", 2),
        ],
    )
    def test_known_distances(self, word1, word2, expected):
        assert levenshtein(word1, word2) == expected

    def test_identity_and_empty(self):
        for word in WORDS:
            assert levenshtein(word, word) == 0
            assert levenshtein("", word) == len(word)
            assert levenshtein(word, "") == len(word)

    def test_symmetric(self):
        with announce("test_symmetric"):
            for a in WORDS:
                for b in WORDS:
                    assert levenshtein(a, b) == levenshtein(b, a)

    def test_empty_uses_insert_and_delete_costs(self):
        assert levenshtein("", "abc", cost_ins=2) == 6
        assert levenshtein("abc", "", cost_del=3) == 9

    @pytest.mark.parametrize(
        "word1, word2, costs, expected",
        [
            ("ab", "abc", {"cost_ins": 5}, 5),
            ("abc", "ab", {"cost_del": 7}, 7),
            ("ab", "abc", {"cost_del": 5}, 1),
            ("abc", "ab", {"cost_ins": 7}, 1),
            ("abc", "abd", {"cost_rep": 3}, 2),
            # trois suppressions et une insertion plutôt qu'un remplacement à 9
            ("xyz", "a", {"cost_ins": 1, "cost_rep": 9, "cost_del": 1}, 4),
            ("kitten", "sitting", {"cost_ins": 2}, 4),
            ("sitting", "kitten", {"cost_del": 2}, 4),
            ("kitten", "sitting", {"cost_ins": 2, "cost_rep": 3, "cost_del": 1}, 8),
        ],
    )
    def test_costs_apply_to_the_right_operation(self, word1, word2, costs, expected):
        assert levenshtein(word1, word2, **costs) == expected

    def test_expensive_replacement_falls_back_to_delete_insert(self):
        assert levenshtein("cat", "cut", cost_rep=5) == 2

    def test_max_distance_cutoff(self):
        assert levenshtein("kitten", "sitting", max_distance=1) == 2
        assert levenshtein("", "abc", max_distance=1) == 2
        assert levenshtein("banan", "banana", max_distance=1) == 1

    @pytest.mark.parametrize("word1, word2", [(None, "a"), ("a", 3), (["a"], "a")])
    def test_non_string_arguments(self, word1, word2):
        with pytest.raises(InvalidArgumentError):
            levenshtein(word1, word2)


class TestLruCache:
    """La distance n'est calculée qu'une fois pour les mêmes arguments."""

    def test_string_distance_lru_cache(self):
        with announce("test_string_distance_lru_cache"):
            with patch('interventions.scoring.distance.lev.distance') as mock_lev_distance:
                mock_lev_distance.return_value = 5
                sd = StringDistance()

                assert sd.distance("test", "text") == 5
                assert sd.distance("test", "text") == 5

                mock_lev_distance.assert_called_once_with(
                    "test", "text", weights=(1, 1, 1), score_cutoff=None
                )

    def test_identical_strings_skip_the_library(self):
        with patch('interventions.scoring.distance.lev.distance') as mock_lev_distance:
            assert StringDistance().distance("same", "same") == 0
            mock_lev_distance.assert_not_called()
