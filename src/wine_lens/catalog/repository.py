"""Catalog repository for wine matching."""

from __future__ import annotations

import json
from importlib import import_module
from importlib.resources import files

from wine_lens.schema import Wine


class CatalogRepository:
    """Loads the read-only wine catalog from packaged data once."""

    def __init__(self, version: str = "v1", entries: list[dict] | None = None):
        self.version = version
        data = entries if entries is not None else self._load_entries()
        self.wines: tuple[Wine, ...] = tuple(
            Wine.model_validate({**item, "source": "catalog"}) for item in data
        )

    def __len__(self) -> int:
        return len(self.wines)

    def get(self, wine_id: str) -> Wine | None:
        return next((wine for wine in self.wines if wine.id == wine_id), None)

    def _load_entries(self) -> list[dict]:
        try:
            module = import_module(f"wine_lens.catalog.data.{self.version}.wines")
            return module.WINES
        except ModuleNotFoundError:
            path = files("wine_lens.catalog.data").joinpath(self.version, "wines.json")
            return json.loads(path.read_text(encoding="utf-8"))
