"""Tests for provider reply parsing."""

import pytest

from wine_lens.exceptions import NoStructuredPayloadFound
from wine_lens.parsing import (
    extract_balanced_payload,
    extract_fenced_payload,
    parse_analysis,
    parse_label_lines,
)
from wine_lens.providers.custom import CustomProvider
from wine_lens.schema import NO_TEXT_EXTRACTED


def test_fenced_json_block_wins():
    reply = """Here is what I found:

```json
{
  "wineName": "Opus One",
  "producer": "Opus One Winery",
  "vintage": 2019,
  "region": "Napa Valley",
  "grapeVarieties": ["Cabernet Sauvignon", "Merlot"],
  "alcoholContent": "14.5%",
  "wineType": "red",
  "extractedText": "OPUS ONE 2019 NAPA VALLEY"
}
```
Let me know if you need more."""

    parsed = parse_analysis(reply)

    assert parsed.strategy == "fenced_json"
    analysis = parsed.analysis
    assert analysis.wine_name == "Opus One"
    assert analysis.vintage == "2019"
    assert analysis.grape_varieties == ["Cabernet Sauvignon", "Merlot"]
    assert analysis.wine_type == "red"
    assert analysis.extracted_text == "OPUS ONE 2019 NAPA VALLEY"
    assert analysis.confidence == 95


def test_embedded_object_in_prose():
    reply = 'The label reads {"wine_name": "Barolo", "grapes": "Nebbiolo, Barbera", "region": "Piedmont"} as shown.'

    parsed = parse_analysis(reply)

    assert parsed.strategy == "embedded_json"
    assert parsed.analysis.wine_name == "Barolo"
    assert parsed.analysis.grape_varieties == ["Nebbiolo", "Barbera"]
    assert parsed.analysis.confidence == 60
    assert parsed.analysis.extracted_text == reply[reply.index("{") : reply.rindex("}") + 1]


OPUS_PAYLOAD = (
    '{"wineName": "Opus One", "producer": "Opus One Winery", "vintage": "2018", '
    '"region": "Napa Valley", "grapeVarieties": ["Cabernet Sauvignon"], "alcoholContent": "14.5%"}'
)


@pytest.mark.parametrize(
    "wrapped",
    [
        f"Here you go:\n```json\n{OPUS_PAYLOAD}\n```\nHope it helps.",
        f"Sure! The label says {OPUS_PAYLOAD}. Anything else?",
        f"```json\n{OPUS_PAYLOAD}\n```",
    ],
)
def test_wrapped_payload_parses_like_bare_payload(wrapped):
    bare = parse_analysis(OPUS_PAYLOAD).analysis
    assert parse_analysis(wrapped).analysis.model_dump() == bare.model_dump()
    assert bare.extracted_text == OPUS_PAYLOAD


def test_fenced_block_without_label_keys_falls_through_to_embedded_object():
    reply = (
        "```json\n{\"status\": \"ok\"}\n```\n"
        "Details: {\"wineName\": \"Barolo\", \"region\": \"Piedmont\"}"
    )

    parsed = parse_analysis(reply)

    assert parsed.strategy == "embedded_json"
    assert parsed.analysis.wine_name == "Barolo"
    assert parsed.analysis.region == "Piedmont"


def test_balanced_scan_skips_objects_without_label_keys():
    parsed = parse_analysis('{"status": "ok"} then {"producer": "Cloudy Bay"}')
    assert parsed.strategy == "embedded_json"
    assert parsed.analysis.producer == "Cloudy Bay"


def test_balanced_scan_ignores_braces_inside_strings():
    text = 'noise {"wineName": "Odd } Name", "producer": "Brace {Cellars}"} trailing'
    payload = extract_balanced_payload(text)
    assert payload == {"wineName": "Odd } Name", "producer": "Brace {Cellars}"}


def test_balanced_scan_skips_invalid_candidates():
    text = "{not json} then {\"vintage\": \"2015\"}"
    assert extract_balanced_payload(text) == {"vintage": "2015"}


def test_fenced_payload_none_without_block():
    assert extract_fenced_payload('{"wineName": "x"}') is None


def test_nested_additional_info_and_numeric_alcohol():
    reply = (
        '{"wineName": "Château Margaux", "alcoholContent": 13.5, '
        '"additionalInfo": {"appellation": "Margaux AOC", "classification": "Premier Grand Cru Classé"}}'
    )

    analysis = parse_analysis(reply).analysis

    assert analysis.alcohol_content == "13.5%"
    assert analysis.additional_info is not None
    assert analysis.additional_info.appellation == "Margaux AOC"
    assert analysis.additional_info.classification == "Premier Grand Cru Classé"


def test_placeholder_values_are_treated_as_empty():
    analysis = parse_analysis('{"wineName": "Unknown", "producer": "Cloudy Bay", "vintage": "N/A"}').analysis
    assert analysis.wine_name == ""
    assert analysis.producer == "Cloudy Bay"
    assert analysis.vintage == ""


def test_structured_payload_with_only_empty_values_fails():
    reply = '{"wineName": "", "producer": null, "grapeVarieties": []}'
    with pytest.raises(NoStructuredPayloadFound) as excinfo:
        parse_analysis(reply)
    assert excinfo.value.raw_text == reply


def test_heuristic_lines_for_ocr_text():
    text = """CHATEAU EXAMPLE
Domaine Example
Pauillac, Bordeaux
2015
Cabernet Sauvignon & Merlot
13.5% vol"""

    parsed = parse_analysis(text)

    assert parsed.strategy == "heuristic_lines"
    analysis = parsed.analysis
    assert analysis.wine_name == "CHATEAU EXAMPLE"
    assert analysis.producer == "Domaine Example"
    assert analysis.region == "Pauillac, Bordeaux"
    assert analysis.vintage == "2015"
    assert analysis.grape_varieties == ["Cabernet Sauvignon", "Merlot"]
    assert analysis.alcohol_content == "13.5%"
    assert analysis.extracted_text == text
    assert analysis.confidence == 95


def test_heuristic_used_when_object_has_no_label_keys():
    parsed = parse_analysis('{"status": "ok"}\nMarlborough Sauvignon Blanc')
    assert parsed.strategy == "heuristic_lines"
    assert parsed.analysis.grape_varieties == ["Sauvignon Blanc"]
    assert parsed.analysis.region == "Marlborough Sauvignon Blanc"


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("Alcohol 12.5% by volume", "12.5%"),
        ("alc. 14% by vol", "14%"),
        ("13,5 % vol", "13.5%"),
        ("ABV: 11%", "11%"),
    ],
)
def test_heuristic_alcohol_formats(line, expected):
    assert parse_label_lines(line).alcohol_content == expected


def test_first_year_is_the_vintage():
    analysis = parse_label_lines("Estate founded 1855\nHarvest 2016")
    assert analysis.vintage == "1855"


@pytest.mark.parametrize("reply", ["", "   ", None, "```\n```"])
def test_empty_reply_raises(reply):
    with pytest.raises(NoStructuredPayloadFound):
        parse_analysis(reply)


def test_parse_lines_on_blank_text_keeps_placeholder():
    assert parse_label_lines("").extracted_text == NO_TEXT_EXTRACTED


def test_provider_aliases_translate_vendor_fields():
    reply = '{"winery_name": "Cloudy Bay", "label_text": "CLOUDY BAY MARLBOROUGH"}'

    analysis = parse_analysis(reply, aliases=CustomProvider.field_aliases).analysis

    assert analysis.producer == "Cloudy Bay"
    assert analysis.extracted_text == "CLOUDY BAY MARLBOROUGH"
