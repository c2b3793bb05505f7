"""wine-lens: Recognize wines from label images and match them to a catalog."""

from wine_lens.core import analyze_label, analyze_label_async, build_recognizer, search_catalog
from wine_lens.config import RecognitionConfig
from wine_lens.schema import MatchResult, Wine, WineLabelAnalysis

__version__ = "0.1.0"

__all__ = [
    "analyze_label",
    "analyze_label_async",
    "build_recognizer",
    "search_catalog",
    "MatchResult",
    "RecognitionConfig",
    "Wine",
    "WineLabelAnalysis",
    "__version__",
]
