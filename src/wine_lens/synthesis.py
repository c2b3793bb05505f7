"""Build a catalog-shaped Wine from a label analysis when nothing matches."""

from __future__ import annotations

import hashlib
import random
import re

from wine_lens.reference import (
    GRAPE_COLOURS,
    GRAPE_PAIRINGS,
    REGION_COUNTRIES,
    SERVING_TEMPERATURES,
    SPARKLING_REGIONS,
    TYPE_PAIRINGS,
)
from wine_lens.schema import TastingNotes, Wine, WineLabelAnalysis
from wine_lens.scoring import estimate_rating

UNKNOWN_WINE = "Unknown Wine"
UNKNOWN_PRODUCER = "Unknown Producer"
UNKNOWN_REGION = "Unknown Region"
UNKNOWN_COUNTRY = "Unknown"
UNAVAILABLE = "Not available for label-identified wines"

MAX_PAIRINGS = 4

_TYPE_KEYWORDS = {
    "sparkling": ("sparkling", "champagne", "cava", "prosecco", "cremant", "crémant"),
    "rose": ("rosé", "rose"),
    "dessert": ("dessert", "port", "sauternes", "ice wine"),
    "white": ("white", "blanc", "bianco"),
    "red": ("red", "rouge", "rosso", "tinto"),
}


def infer_country(region: str | None) -> str:
    lowered = (region or "").lower()
    for name, country in REGION_COUNTRIES.items():
        if name in lowered:
            return country
    return UNKNOWN_COUNTRY


def infer_wine_type(analysis: WineLabelAnalysis) -> str:
    """Classify as red/white/rose/sparkling/dessert.

    An explicit wine type from the label wins; otherwise sparkling regions,
    then grape colours decide, defaulting to red.
    """
    declared = (analysis.wine_type or "").lower()
    for wine_type, keywords in _TYPE_KEYWORDS.items():
        if any(keyword in declared for keyword in keywords):
            return wine_type

    region = analysis.region.lower()
    if any(name in region for name in SPARKLING_REGIONS):
        return "sparkling"

    colours = {GRAPE_COLOURS[grape] for grape in analysis.grape_varieties if grape in GRAPE_COLOURS}
    if colours == {"white"}:
        return "white"
    return "red"


def food_pairings_for(grapes: list[str], wine_type: str) -> tuple[str, ...]:
    pairings: list[str] = []
    for grape in grapes:
        for dish in GRAPE_PAIRINGS.get(grape, ()):
            if dish not in pairings:
                pairings.append(dish)
    if not pairings:
        pairings = list(TYPE_PAIRINGS.get(wine_type, TYPE_PAIRINGS["red"]))
    return tuple(pairings[:MAX_PAIRINGS])


def has_usable_text(analysis: WineLabelAnalysis) -> bool:
    return any(
        (
            analysis.wine_name.strip(),
            analysis.producer.strip(),
            analysis.region.strip(),
            analysis.vintage.strip(),
            analysis.grape_varieties,
            analysis.has_extracted_text,
        )
    )


def _vintage_year(vintage: str) -> int | None:
    match = re.search(r"\b(?:19|20)\d{2}\b", vintage or "")
    return int(match.group(0)) if match else None


def _synthetic_id(name: str, producer: str, vintage: str) -> str:
    digest = hashlib.sha1(f"{name}|{producer}|{vintage}".encode("utf-8")).hexdigest()
    return f"analysis-{digest[:12]}"


def synthesize_wine(analysis: WineLabelAnalysis, *, rng: random.Random | None = None) -> Wine | None:
    """Build a standalone Wine record from analysis fields alone.

    Returns None when the analysis carries no usable text at all.
    """
    if not has_usable_text(analysis):
        return None

    name = analysis.wine_name or analysis.producer or UNKNOWN_WINE
    producer = analysis.producer or UNKNOWN_PRODUCER
    region = analysis.region or UNKNOWN_REGION
    wine_type = infer_wine_type(analysis)
    info = analysis.additional_info

    details = [part for part in (info.classification if info else None, info.appellation if info else None) if part]
    description = f"{name} identified from its label"
    if details:
        description += f" ({', '.join(details)})"

    return Wine(
        id=_synthetic_id(name, producer, analysis.vintage),
        name=name,
        producer=producer,
        vintage=_vintage_year(analysis.vintage),
        region=region,
        country=infer_country(analysis.region),
        grape_varieties=tuple(analysis.grape_varieties),
        rating=estimate_rating(analysis, rng=rng),
        alcohol_content=analysis.alcohol_content,
        description=description + ".",
        tasting_notes=TastingNotes(
            appearance=UNAVAILABLE,
            aroma=UNAVAILABLE,
            taste=UNAVAILABLE,
            finish=UNAVAILABLE,
        ),
        food_pairings=food_pairings_for(analysis.grape_varieties, wine_type),
        serving_temperature=SERVING_TEMPERATURES[wine_type],
        source="derived-from-analysis",
    )
