"""Tests for the JSONL history sink."""

from datetime import datetime, timezone

from wine_lens.history import load_history, record_history
from wine_lens.schema import MatchResult, Wine

WINE = Wine(id="4", name="Cloudy Bay Sauvignon Blanc", producer="Cloudy Bay", vintage=2022,
            region="Marlborough", country="New Zealand", rating=91)


def test_record_and_load_most_recent_first(tmp_path):
    path = tmp_path / "history.jsonl"
    stamp = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    entry = record_history(path, MatchResult(wine=WINE, confidence=88, extracted_text="CLOUDY BAY"), now=stamp)
    record_history(path, MatchResult(wine=None, confidence=30, extracted_text=""))

    assert entry == {
        "recorded_at": "2024-05-01T12:00:00+00:00",
        "wine_id": "4",
        "name": "Cloudy Bay Sauvignon Blanc",
        "producer": "Cloudy Bay",
        "vintage": 2022,
        "source": "catalog",
        "confidence": 88,
    }
    entries = load_history(path)
    assert [item["wine_id"] for item in entries] == [None, "4"]
    assert load_history(path, limit=1)[0]["confidence"] == 30


def test_load_missing_history(tmp_path):
    assert load_history(tmp_path / "none.jsonl") == []


def test_blank_lines_are_skipped(tmp_path):
    path = tmp_path / "history.jsonl"
    record_history(path, MatchResult(wine=WINE, confidence=70, extracted_text="x"))
    with path.open("a", encoding="utf-8") as fh:
        fh.write("\n\n")
    assert len(load_history(path)) == 1
