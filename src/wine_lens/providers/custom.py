"""Provider for self-hosted analysis endpoints."""

import os

import httpx

from wine_lens.exceptions import ProviderConfigInvalid, ProviderUnavailable
from wine_lens.image import LabelImage
from wine_lens.parsing import DEFAULT_FIELD_ALIASES
from wine_lens.providers.base import BaseProvider
from wine_lens.schema import WineLabelAnalysis

TASK_NAME = "wine_label_analysis"


class CustomProvider(BaseProvider):
    """POSTs the base64 image to a configured endpoint and parses the reply body.

    Self-hosted services tend to answer with their own field names, so the
    alias table also accepts ``label_text``/``ocr_text`` and ``winery_name``.
    """

    name = "custom"
    field_aliases = {
        **DEFAULT_FIELD_ALIASES,
        "producer": DEFAULT_FIELD_ALIASES["producer"] + ("winery_name",),
        "extracted_text": DEFAULT_FIELD_ALIASES["extracted_text"] + ("label_text", "ocr_text"),
    }

    def __init__(
        self,
        endpoint: str | None = None,
        api_key: str | None = None,
        *,
        model: str | None = None,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ):
        super().__init__()
        self.endpoint = endpoint
        if not self.endpoint:
            raise ProviderConfigInvalid("Custom provider requires WINE_LENS_ENDPOINT.")
        self.api_key = api_key or os.environ.get("CUSTOM_API_KEY")
        if not self.api_key:
            raise ProviderConfigInvalid(
                "No API key provided. Set CUSTOM_API_KEY or WINE_LENS_API_KEY."
            )
        self.model = model
        self.client = client or httpx.Client(timeout=timeout)

    def analyze(self, image: LabelImage) -> WineLabelAnalysis:
        try:
            response = self.client.post(
                self.endpoint,
                json={"image": image.to_base64(), "task": TASK_NAME, "model": self.model},
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ProviderUnavailable(f"Custom API request failed: {e}") from e
        return self.parse_reply(response.text)
