"""Case-insensitive search of parts and nets by name."""

from __future__ import annotations

import enum
import string
from collections.abc import Iterable
from typing import Any

_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


class SearchMode(enum.Enum):
    SUB = "sub"
    PREFIX = "prefix"
    WHOLE = "whole"


def mode_matches(haystack: str, needle: str, mode: SearchMode) -> bool:
    """Whether *needle* occurs in *haystack* as *mode* demands, ignoring case."""
    position = haystack.translate(_ASCII_UPPER).find(needle.translate(_ASCII_UPPER))
    if position == -1:
        return False
    if mode is SearchMode.SUB:
        return True
    if mode is SearchMode.PREFIX:
        return position == 0
    return position == 0 and len(needle) == len(haystack)


class Searcher:
    """Finds parts and nets whose names (or details) match a search string.

    Items need a ``name`` attribute; when ``search_details`` is set, the
    strings returned by an item's ``searchable_string_details()`` method are
    searched too.
    """

    def __init__(self) -> None:
        self.mode = SearchMode.SUB
        self.search_details = False
        self._nets: list[Any] = []
        self._parts: list[Any] = []

    def set_nets(self, nets: Iterable[Any]) -> None:
        self._nets = list(nets)

    def set_parts(self, parts: Iterable[Any]) -> None:
        self._parts = list(parts)

    def is_mode(self, mode: SearchMode) -> bool:
        return self.mode is mode

    def set_mode(self, mode: SearchMode) -> None:
        self.mode = mode

    def _matches(self, item: Any, search: str) -> bool:
        if mode_matches(item.name, search, self.mode):
            return True
        if not self.search_details:
            return False
        details = getattr(item, "searchable_string_details", None)
        if details is None:
            return False
        return any(mode_matches(detail, search, self.mode) for detail in details())

    def _search_for(self, search: str, items: list[Any], limit: int) -> list[Any]:
        results: list[Any] = []
        if not search:
            return results
        for item in items:
            if self._matches(item, search):
                results.append(item)
                limit -= 1
            if limit == 0:
                return results
        return results

    def parts(self, search: str, limit: int = -1) -> list[Any]:
        """Parts matching *search*; at most *limit* of them when it is positive."""
        return self._search_for(search, self._parts, limit)

    def nets(self, search: str, limit: int = -1) -> list[Any]:
        """Nets matching *search*; at most *limit* of them when it is positive."""
        return self._search_for(search, self._nets, limit)