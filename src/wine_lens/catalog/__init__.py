"""Wine catalog and matching utilities for wine-lens."""

from wine_lens.catalog.matcher import CatalogMatcher, RankedWine
from wine_lens.catalog.repository import CatalogRepository

__all__ = [
    "CatalogMatcher",
    "CatalogRepository",
    "RankedWine",
]
