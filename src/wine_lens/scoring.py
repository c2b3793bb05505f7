"""Confidence scoring for label analyses and catalog matches."""

from __future__ import annotations

import random

from wine_lens.schema import WineLabelAnalysis

SIGNAL_POINTS = 20
ANALYSIS_FLOOR = 30
ANALYSIS_CEILING = 95
CATALOG_BOOST = 15
MATCH_FLOOR = 60
MATCH_CEILING = 95
FACTOR_FLOOR = 0.7

RATING_BASE = 84
RATING_FLOOR = 80
RATING_CEILING = 96


def _clamp(value: float, low: int, high: int) -> int:
    return int(max(low, min(high, value)))


def _present(value: str | None) -> bool:
    return bool(value and value.strip())


def _core_signals(analysis: WineLabelAnalysis) -> list[bool]:
    return [
        _present(analysis.wine_name),
        _present(analysis.producer),
        _present(analysis.vintage),
        _present(analysis.region),
        any(_present(grape) for grape in analysis.grape_varieties),
    ]


def _broad_signals(analysis: WineLabelAnalysis) -> list[bool]:
    return _core_signals(analysis) + [_present(analysis.alcohol_content)]


def completeness_score(analysis: WineLabelAnalysis) -> int:
    """Score an analysis by how many of its five core fields are filled.

    Each of name, producer, vintage, region and grape list is worth
    20 points; the total is clamped to [30, 95].
    """
    score = SIGNAL_POINTS * sum(_core_signals(analysis))
    return _clamp(score, ANALYSIS_FLOOR, ANALYSIS_CEILING)


def completeness_factor(analysis: WineLabelAnalysis) -> float:
    """Scale in [0.7, 1.0] rewarding richer analyses (six signals incl. alcohol)."""
    signals = _broad_signals(analysis)
    return FACTOR_FLOOR + (1.0 - FACTOR_FLOOR) * sum(signals) / len(signals)


def blended_score(analysis: WineLabelAnalysis, *, from_catalog: bool) -> int:
    """Confidence for a result anchored to a catalog candidate.

    Starts from the completeness score, adds the catalog boost when the
    candidate came from the catalog, scales by the completeness factor and
    clamps to [60, 95].
    """
    score = completeness_score(analysis)
    if from_catalog:
        score = min(score + CATALOG_BOOST, ANALYSIS_CEILING)
    scaled = round(score * completeness_factor(analysis))
    return _clamp(scaled, MATCH_FLOOR, MATCH_CEILING)


def score_analysis(analysis: WineLabelAnalysis) -> WineLabelAnalysis:
    """Return a copy of the analysis with its completeness confidence set."""
    return analysis.model_copy(update={"confidence": completeness_score(analysis)})


def estimate_rating(analysis: WineLabelAnalysis, *, rng: random.Random | None = None) -> int:
    """Estimate a 100-point rating for a wine known only from its label.

    Pass ``rng`` to add a +/-1 jitter so estimates do not all land on the
    same even numbers; without it the estimate is deterministic.
    """
    rating = RATING_BASE + 2 * sum(_core_signals(analysis))
    info = analysis.additional_info
    if info and _present(info.classification):
        rating += 2
    if rng is not None:
        rating += rng.randint(-1, 1)
    return _clamp(rating, RATING_FLOOR, RATING_CEILING)
