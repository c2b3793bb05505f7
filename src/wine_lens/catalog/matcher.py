"""Free-text search and best-match ranking over the wine catalog."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from wine_lens.schema import Wine

MIN_TOKEN_LENGTH = 3
PHRASE_POINTS = 10
TOKEN_POINTS = 1

_NON_ALNUM = re.compile(r"[^a-z0-9]")


@dataclass(frozen=True)
class RankedWine:
    wine: Wine
    score: int


def _normalize_query(text: str) -> str:
    return " ".join(text.lower().split())


def _tokens(text: str) -> list[str]:
    return [token for token in text.lower().split() if len(token) >= MIN_TOKEN_LENGTH]


def _searchable_text(wine: Wine) -> str:
    parts = [wine.name, wine.producer, wine.region, wine.country, *wine.grape_varieties]
    if wine.vintage is not None:
        parts.append(str(wine.vintage))
    return " ".join(parts).lower()


def _relevance_text(wine: Wine) -> str:
    return f"{wine.name} {wine.producer}".lower()


class CatalogMatcher:
    """Token search and phrase-weighted ranking over an immutable catalog.

    Search and ranking are pure and synchronous, and ranking is a stable
    sort: equal scores keep catalog order, so repeated queries return the
    same ordering.
    """

    def __init__(self, wines: Iterable[Wine]):
        self.wines: tuple[Wine, ...] = tuple(wines)
        self._searchable = tuple(_searchable_text(wine) for wine in self.wines)

    def search(self, query: str | None) -> list[Wine]:
        """Return candidates for the query, most relevant first."""
        return [ranked.wine for ranked in self.rank(query)]

    def best_match(self, query: str | None) -> Wine | None:
        """Return the top-ranked candidate, or None when nothing matches."""
        ranked = self.rank(query)
        return ranked[0].wine if ranked else None

    def candidates(self, query: str | None) -> list[Wine]:
        """Return catalog entries sharing any query token, in catalog order."""
        tokens = _tokens(query or "")
        if not tokens:
            return []

        needles: list[str] = []
        for token in tokens:
            needles.append(token)
            stripped = _NON_ALNUM.sub("", token)
            if stripped and stripped != token:
                needles.append(stripped)

        return [
            wine
            for wine, haystack in zip(self.wines, self._searchable)
            if any(needle in haystack for needle in needles)
        ]

    def rank(self, query: str | None) -> list[RankedWine]:
        candidates = self.candidates(query)
        if not candidates:
            return []

        phrase = _normalize_query(query or "")
        tokens = _tokens(query or "")
        scored: list[RankedWine] = []
        for wine in candidates:
            relevance = _relevance_text(wine)
            score = PHRASE_POINTS if phrase in relevance else 0
            score += TOKEN_POINTS * sum(1 for token in tokens if token in relevance)
            scored.append(RankedWine(wine=wine, score=score))

        # sorted() is stable: ties keep catalog order.
        return sorted(scored, key=lambda item: item.score, reverse=True)
