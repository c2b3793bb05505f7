"""Wine catalog v1."""

from wine_lens.catalog.data.v1.wines import WINES

__all__ = ["WINES"]
