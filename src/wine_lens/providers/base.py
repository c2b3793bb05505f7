"""Base provider interface."""

from abc import ABC, abstractmethod

from wine_lens.image import LabelImage
from wine_lens.parsing import DEFAULT_FIELD_ALIASES, FieldAliases, parse_analysis
from wine_lens.schema import WineLabelAnalysis

ANALYSIS_PROMPT = """Analyze this wine label image and extract the following information in JSON format:

{
  "wineName": "exact wine name",
  "producer": "producer/winery name",
  "vintage": "year as string",
  "region": "region/appellation",
  "grapeVarieties": ["grape1", "grape2"],
  "alcoholContent": "alcohol percentage if visible",
  "wineType": "red/white/rosé/sparkling/dessert",
  "appellation": "specific appellation/AVA if mentioned",
  "classification": "classification level if mentioned",
  "extractedText": "all visible text on the label"
}

Important:
- Be precise and only include information that is clearly visible on the label
- Use an empty string or empty list for anything not visible
- Return only valid JSON without any additional text"""


class BaseProvider(ABC):
    """Abstract base class for label analysis backends."""

    name: str = "base"
    field_aliases: FieldAliases = DEFAULT_FIELD_ALIASES

    def __init__(self) -> None:
        self._last_parser = "none"

    @abstractmethod
    def analyze(self, image: LabelImage) -> WineLabelAnalysis:
        """Analyze a wine label image.

        Implementations send exactly one request per call.

        Args:
            image: Label image with its declared media type

        Returns:
            WineLabelAnalysis with extracted information

        Raises:
            ProviderUnavailable: On network/HTTP failure
            ProviderResponseInvalid: If the reply has no usable content
            ProviderConfigInvalid: If a credential or endpoint is missing
        """
        pass

    def parse_reply(self, text: str | None) -> WineLabelAnalysis:
        """Run the reply through the parser using this provider's field names."""
        self._last_parser = "unparsed"
        parsed = parse_analysis(text, aliases=self.field_aliases)
        self._last_parser = parsed.strategy
        return parsed.analysis

    def get_analysis_metadata(self) -> dict[str, str]:
        """Return provider-specific metadata about the last analysis."""
        return {"provider": self.name, "parser": self._last_parser}
