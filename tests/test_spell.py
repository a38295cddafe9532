import pytest

from obvtools.spell import SpellCorrector, levenshtein_distance


def test_identical_strings_have_zero_distance():
    assert levenshtein_distance("U1000", "U1000", 5) == 0


def test_distance_to_empty_is_length():
    assert levenshtein_distance("", "abcd", 10) == len("abcd")
    assert levenshtein_distance("abcd", "", 10) == len("abcd")


def test_classic_example():
    assert levenshtein_distance("kitten", "sitting", 100) == 3


@pytest.mark.parametrize(
    "a, b",
    [("kitten", "sitting"), ("PP3V3", "PP5V"), ("GND", "G"), ("abc", "cab")],
)
def test_full_distance_is_symmetric(a, b):
    assert levenshtein_distance(a, b, len(b)) == levenshtein_distance(b, a, len(a))


@pytest.mark.parametrize("limit", [0, 1, 2, 3, 4, 6])
def test_limit_truncates_second_string(limit):
    a, b = "abc", "abcdef"
    assert levenshtein_distance(a, b, limit) == levenshtein_distance(a, b[:limit], len(b))


def test_suggest_orders_best_first():
    corrector = SpellCorrector(["U1000", "U1001", "C512", "R7"])
    assert corrector.suggest("u1000") == ["U1000", "U1001"]


def test_suggest_is_case_insensitive_and_keeps_original_case():
    corrector = SpellCorrector(["PP3V3_S5"])
    assert corrector.suggest("pp3v3_s5") == ["PP3V3_S5"]


def test_suggest_matches_longer_entries_by_prefix():
    corrector = SpellCorrector(["U1000"])
    assert corrector.suggest("u1") == ["U1000"]


def test_distance_at_threshold_is_not_suggested():
    assert SpellCorrector(["xyz"]).suggest("abc") == []
    assert SpellCorrector(["xyz"], threshold=4).suggest("abc") == ["xyz"]