"""Extract structured label analyses from provider replies.

Provider replies are not guaranteed to be clean JSON: models wrap the
payload in prose or markdown, and OCR backends return plain text. Parsing
walks an ordered chain of strategies and the first one that yields a
populated analysis wins:

1. a fenced ```json block
2. the first balanced ``{...}`` object embedded in the reply
3. heuristic line parsing over the whole reply
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Iterator, Mapping, NamedTuple

from wine_lens.exceptions import NoStructuredPayloadFound
from wine_lens.reference import KNOWN_GRAPES, REGION_COUNTRIES
from wine_lens.schema import NO_TEXT_EXTRACTED, AdditionalInfo, WineLabelAnalysis
from wine_lens.scoring import score_analysis

logger = logging.getLogger(__name__)

FieldAliases = Mapping[str, tuple[str, ...]]

DEFAULT_FIELD_ALIASES: FieldAliases = {
    "wine_name": ("wineName", "wine_name", "name"),
    "producer": ("producer", "winery", "brand"),
    "vintage": ("vintage", "year"),
    "region": ("region",),
    "grape_varieties": ("grapeVarieties", "grape_varieties", "grapes", "varietal"),
    "alcohol_content": ("alcoholContent", "alcohol_content", "alcohol", "abv"),
    "extracted_text": ("extractedText", "extracted_text", "text"),
    "wine_type": ("wineType", "wine_type"),
    "appellation": ("appellation",),
    "classification": ("classification",),
    "additional_info": ("additionalInfo", "additional_info"),
}

_LABEL_FIELDS = ("wine_name", "producer", "vintage", "region", "grape_varieties", "alcohol_content")
_EMPTY_VALUES = {"", "null", "none", "n/a", "na", "unknown", "not visible", "not available", "-"}

_FENCED_JSON = re.compile(r"```json[ \t]*\r?\n?(.*?)```", re.DOTALL | re.IGNORECASE)
_YEAR = re.compile(r"\b(?:19|20)\d{2}\b")
_ALCOHOL_BEFORE_KEYWORD = re.compile(
    r"(\d{1,2}(?:[.,]\d{1,2})?)\s*%?\s*(?:alc|alcohol|vol|abv)\b", re.IGNORECASE
)
_ALCOHOL_AFTER_KEYWORD = re.compile(
    r"\b(?:alc|alcohol|abv)\.?\s*(?:by\s+vol(?:ume)?\.?)?\s*[:.]?\s*(\d{1,2}(?:[.,]\d{1,2})?)\s*%",
    re.IGNORECASE,
)
_GRAPE_SPLIT = re.compile(r"[,/;&]")


class ParsedAnalysis(NamedTuple):
    analysis: WineLabelAnalysis
    strategy: str


def extract_fenced_payload(text: str) -> dict[str, Any] | None:
    """Return the first ```json fenced block that parses to an object."""
    return next((payload for payload, _ in _fenced_candidates(text)), None)


def _fenced_candidates(text: str) -> Iterator[tuple[dict[str, Any], str]]:
    for match in _FENCED_JSON.finditer(text):
        source = match.group(1).strip()
        try:
            payload = json.loads(source)
        except json.JSONDecodeError:
            continue
        if isinstance(payload, dict):
            yield payload, source


def extract_balanced_payload(text: str) -> dict[str, Any] | None:
    """Return the first brace-balanced substring that parses to an object."""
    return next((payload for payload, _ in _balanced_candidates(text)), None)


def _balanced_candidates(text: str) -> Iterator[tuple[dict[str, Any], str]]:
    start = text.find("{")
    while start != -1:
        end = _matching_brace(text, start)
        if end is not None:
            source = text[start : end + 1]
            try:
                payload = json.loads(source)
            except json.JSONDecodeError:
                payload = None
            if isinstance(payload, dict):
                yield payload, source
                start = text.find("{", end + 1)
                continue
        start = text.find("{", start + 1)


def _matching_brace(text: str, start: int) -> int | None:
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return None


def parse_label_lines(text: str) -> WineLabelAnalysis:
    """Heuristically read label fields from free text, one line at a time."""
    lines = [
        line.strip()
        for line in text.splitlines()
        if line.strip() and not line.strip().startswith("```")
    ]

    vintage = ""
    alcohol: str | None = None
    region = ""
    grapes: list[str] = []

    for line in lines:
        lowered = line.lower()
        if not vintage:
            year = _YEAR.search(line)
            if year:
                vintage = year.group(0)
        if alcohol is None:
            alcohol = _find_alcohol(line)
        if not region and any(name in lowered for name in REGION_COUNTRIES):
            region = line
        for grape in KNOWN_GRAPES:
            if grape.lower() in lowered and grape not in grapes:
                grapes.append(grape)

    analysis = WineLabelAnalysis(
        wine_name=lines[0] if lines else "",
        producer=lines[1] if len(lines) > 1 else "",
        vintage=vintage,
        region=region,
        grape_varieties=grapes,
        alcohol_content=alcohol,
        extracted_text=text.strip() or NO_TEXT_EXTRACTED,
    )
    return score_analysis(analysis)


def _find_alcohol(line: str) -> str | None:
    match = _ALCOHOL_BEFORE_KEYWORD.search(line) or _ALCOHOL_AFTER_KEYWORD.search(line)
    if not match:
        return None
    return match.group(1).replace(",", ".") + "%"


def has_label_fields(payload: Mapping[str, Any], aliases: FieldAliases = DEFAULT_FIELD_ALIASES) -> bool:
    """True when the payload carries at least one known label key."""
    return any(key in payload for field in _LABEL_FIELDS for key in aliases.get(field, ()))


def analysis_from_payload(
    payload: Mapping[str, Any],
    source_text: str,
    aliases: FieldAliases = DEFAULT_FIELD_ALIASES,
) -> WineLabelAnalysis:
    """Translate a provider payload into a scored WineLabelAnalysis.

    ``source_text`` is the JSON text the payload was read from; it stands in
    for ``extracted_text`` when the payload has none.
    """

    def pick(field: str, source: Mapping[str, Any] = payload) -> Any:
        for key in aliases.get(field, ()):
            if key in source and source[key] is not None:
                return source[key]
        return None

    nested = pick("additional_info")
    info_source: Mapping[str, Any] = nested if isinstance(nested, Mapping) else {}
    info = AdditionalInfo(
        wine_type=_text(pick("wine_type") or pick("wine_type", info_source)) or None,
        appellation=_text(pick("appellation") or pick("appellation", info_source)) or None,
        classification=_text(pick("classification") or pick("classification", info_source)) or None,
    )
    has_info = any((info.wine_type, info.appellation, info.classification))

    alcohol = _text(pick("alcohol_content"))
    if alcohol and not alcohol.endswith("%") and re.fullmatch(r"\d{1,2}(?:\.\d+)?", alcohol):
        alcohol += "%"

    extracted = _text(pick("extracted_text")) or source_text.strip() or NO_TEXT_EXTRACTED

    analysis = WineLabelAnalysis(
        wine_name=_text(pick("wine_name")),
        producer=_text(pick("producer")),
        vintage=_text(pick("vintage")),
        region=_text(pick("region")),
        grape_varieties=_grapes(pick("grape_varieties")),
        alcohol_content=alcohol or None,
        extracted_text=extracted,
        additional_info=info if has_info else None,
    )
    return score_analysis(analysis)


def _text(value: Any) -> str:
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(int(value)) if float(value).is_integer() else str(value)
    if not isinstance(value, str):
        return ""
    cleaned = value.strip()
    return "" if cleaned.lower() in _EMPTY_VALUES else cleaned


def _grapes(value: Any) -> list[str]:
    if isinstance(value, str):
        items = _GRAPE_SPLIT.split(value)
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        return []
    grapes: list[str] = []
    for item in items:
        grape = _text(item)
        if grape and grape not in grapes:
            grapes.append(grape)
    return grapes


def is_populated(analysis: WineLabelAnalysis) -> bool:
    """True when at least one label field was recovered."""
    return any(
        (
            analysis.wine_name,
            analysis.producer,
            analysis.vintage,
            analysis.region,
            analysis.grape_varieties,
            analysis.alcohol_content,
        )
    )


_PAYLOAD_STRATEGIES: tuple[tuple[str, Callable[[str], Iterator[tuple[dict[str, Any], str]]]], ...] = (
    ("fenced_json", _fenced_candidates),
    ("embedded_json", _balanced_candidates),
)


def parse_analysis(text: str | None, *, aliases: FieldAliases = DEFAULT_FIELD_ALIASES) -> ParsedAnalysis:
    """Parse a provider reply into a WineLabelAnalysis.

    Args:
        text: Raw reply text (JSON, JSON wrapped in prose/markdown, or OCR text).
        aliases: Field name translation table supplied by the calling provider.

    Returns:
        ParsedAnalysis with the analysis and the name of the winning strategy.

    Raises:
        NoStructuredPayloadFound: If no strategy recovers a populated field.
    """
    raw = (text or "").strip()
    if not raw:
        raise NoStructuredPayloadFound("Provider reply was empty", raw_text="")

    for strategy, candidates in _PAYLOAD_STRATEGIES:
        found = next(
            ((payload, source) for payload, source in candidates(raw) if has_label_fields(payload, aliases)),
            None,
        )
        if found is None:
            logger.debug("%s found no payload with label keys", strategy)
            continue
        payload, source = found
        analysis = analysis_from_payload(payload, source, aliases)
        if not is_populated(analysis):
            raise NoStructuredPayloadFound("Structured payload has no populated fields", raw_text=raw)
        return ParsedAnalysis(analysis, strategy)

    analysis = parse_label_lines(raw)
    if not is_populated(analysis):
        raise NoStructuredPayloadFound("No label fields found in reply", raw_text=raw)
    return ParsedAnalysis(analysis, "heuristic_lines")
