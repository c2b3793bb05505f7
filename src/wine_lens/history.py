"""Append-only JSONL record of finished recognitions."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from wine_lens.schema import MatchResult


def history_entry(result: MatchResult, *, now: datetime | None = None) -> dict[str, Any]:
    wine = result.wine
    return {
        "recorded_at": (now or datetime.now(timezone.utc)).isoformat(),
        "wine_id": wine.id if wine else None,
        "name": wine.name if wine else None,
        "producer": wine.producer if wine else None,
        "vintage": wine.vintage if wine else None,
        "source": wine.source if wine else None,
        "confidence": result.confidence,
    }


def record_history(path: str | Path, result: MatchResult, *, now: datetime | None = None) -> dict[str, Any]:
    """Append one line for a finished result and return the written entry."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    entry = history_entry(result, now=now)
    with path.open("a", encoding="utf-8") as fh:
        fh.write(json.dumps(entry, ensure_ascii=False) + "\n")
    return entry


def load_history(path: str | Path, limit: int = 50) -> list[dict[str, Any]]:
    """Return up to ``limit`` entries, most recent first. Blank lines are skipped."""
    path = Path(path)
    if not path.exists():
        return []
    entries = [
        json.loads(line)
        for line in path.read_text(encoding="utf-8").splitlines()
        if line.strip()
    ]
    entries.reverse()
    return entries[:limit]
