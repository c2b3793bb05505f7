"""Gemini provider implementation."""

import os

import httpx
from google import genai
from google.genai import errors, types

from wine_lens.exceptions import ProviderConfigInvalid, ProviderResponseInvalid, ProviderUnavailable
from wine_lens.image import LabelImage
from wine_lens.providers.base import ANALYSIS_PROMPT, BaseProvider
from wine_lens.schema import WineLabelAnalysis


class GeminiProvider(BaseProvider):
    """Gemini Vision API provider."""

    name = "gemini"

    def __init__(self, api_key: str | None = None, model: str | None = None, *, client=None):
        """Initialize Gemini provider.

        Args:
            api_key: Gemini API key. Falls back to GEMINI_API_KEY env var.
            model: Model name to use.
            client: Preconstructed genai client, mainly for tests.

        Raises:
            ProviderConfigInvalid: If no API key is provided or found.
        """
        super().__init__()
        self.model = model or "gemini-2.0-flash"
        if client is not None:
            self.client = client
            return

        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        if not self.api_key:
            raise ProviderConfigInvalid(
                "No API key provided. Set GEMINI_API_KEY environment variable "
                "or pass api_key parameter."
            )
        self.client = genai.Client(api_key=self.api_key)

    def analyze(self, image: LabelImage) -> WineLabelAnalysis:
        """Analyze a label with Gemini Vision.

        Raises:
            ProviderUnavailable: If the API call fails
            ProviderResponseInvalid: If the reply carries no text
        """
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=[
                    types.Part.from_bytes(data=image.data, mime_type=image.transport_media_type),
                    ANALYSIS_PROMPT,
                ],
                config=types.GenerateContentConfig(
                    temperature=0.1,
                    max_output_tokens=1000,
                    response_mime_type="application/json",
                ),
            )
        except (errors.APIError, httpx.HTTPError) as e:
            raise ProviderUnavailable(f"Gemini request failed: {e}") from e

        text = getattr(response, "text", None)
        if not text:
            raise ProviderResponseInvalid("Gemini response has no text candidates")
        return self.parse_reply(text)
