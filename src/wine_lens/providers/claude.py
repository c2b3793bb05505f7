"""Claude vision provider implementation."""

import os

import anthropic

from wine_lens.exceptions import ProviderConfigInvalid, ProviderResponseInvalid, ProviderUnavailable
from wine_lens.image import LabelImage
from wine_lens.providers.base import ANALYSIS_PROMPT, BaseProvider
from wine_lens.schema import WineLabelAnalysis


class ClaudeProvider(BaseProvider):
    """Anthropic Messages API provider."""

    name = "claude"
    DEFAULT_MODEL = "claude-sonnet-4-5-20250929"

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str | None = None,
        endpoint: str | None = None,
        timeout: float = 30.0,
        max_tokens: int = 1000,
        client=None,
    ):
        super().__init__()
        self.model = model or self.DEFAULT_MODEL
        self.max_tokens = max_tokens
        if client is not None:
            self.client = client
            return

        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        if not self.api_key:
            raise ProviderConfigInvalid(
                "No API key provided. Set ANTHROPIC_API_KEY or WINE_LENS_API_KEY."
            )
        self.client = anthropic.Anthropic(
            api_key=self.api_key,
            base_url=endpoint,
            timeout=timeout,
            max_retries=0,
        )

    def analyze(self, image: LabelImage) -> WineLabelAnalysis:
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image",
                                "source": {
                                    "type": "base64",
                                    "media_type": image.transport_media_type,
                                    "data": image.to_base64(),
                                },
                            },
                            {"type": "text", "text": ANALYSIS_PROMPT},
                        ],
                    }
                ],
            )
        except anthropic.APIError as e:
            raise ProviderUnavailable(f"Claude request failed: {e}") from e

        text = "".join(
            block.text for block in getattr(response, "content", None) or [] if getattr(block, "type", "") == "text"
        )
        if not text:
            raise ProviderResponseInvalid("Claude response has no text content")
        return self.parse_reply(text)
