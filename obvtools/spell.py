"""Fuzzy suggestions for mistyped part and net names."""

from __future__ import annotations

import string
from collections.abc import Iterable

DEFAULT_THRESHOLD = 3

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def levenshtein_distance(s1: str, s2: str, limit: int) -> int:
    """Edit distance between *s1* and the first *limit* characters of *s2*."""
    limit = min(limit, len(s2))
    target = s2[:limit]
    previous = list(range(limit + 1))
    for row, char in enumerate(s1, start=1):
        current = [row]
        for col, other in enumerate(target):
            current.append(
                min(
                    previous[col + 1] + 1,
                    current[col] + 1,
                    previous[col] + (0 if char == other else 1),
                )
            )
        previous = current
    return previous[limit]


class SpellCorrector:
    """Suggests dictionary words that are close to a given word."""

    def __init__(self, dictionary: Iterable[str] = (), threshold: int = DEFAULT_THRESHOLD) -> None:
        self.dictionary: list[str] = list(dictionary)
        self.threshold = threshold

    def set_dictionary(self, dictionary: Iterable[str]) -> None:
        self.dictionary = list(dictionary)

    def _fuzzy_match(self, s1: str, s2: str) -> int:
        """Score of *s2* against *s1*; 0 means no match."""
        score = levenshtein_distance(s1, s2, len(s1) + 1)
        if score > self.threshold:
            return 0
        return self.threshold - score

    def suggest(self, word: str) -> list[str]:
        """Dictionary words close to *word*, best match first."""
        word_lower = word.translate(_ASCII_LOWER)
        scored = []
        for entry in self.dictionary:
            score = self._fuzzy_match(word_lower, entry.translate(_ASCII_LOWER))
            if score:
                scored.append((entry, score))
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return [entry for entry, _ in scored]