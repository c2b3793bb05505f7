"""OpenAI-compatible chat completions providers (OpenAI, AnyRouter gateway)."""

import logging
import os

import openai
from openai import OpenAI

from wine_lens.exceptions import ProviderConfigInvalid, ProviderResponseInvalid, ProviderUnavailable
from wine_lens.image import LabelImage
from wine_lens.providers.base import ANALYSIS_PROMPT, BaseProvider
from wine_lens.schema import WineLabelAnalysis

logger = logging.getLogger(__name__)


class OpenAIProvider(BaseProvider):
    """OpenAI vision provider using the chat completions API."""

    name = "openai"
    api_key_env = "OPENAI_API_KEY"
    default_model = "gpt-4o"
    default_base_url: str | None = None

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str | None = None,
        endpoint: str | None = None,
        timeout: float = 30.0,
        client=None,
    ):
        """Initialize the provider.

        Args:
            api_key: API key. Falls back to the provider's environment variable.
            model: Model name to use.
            endpoint: Base URL override for OpenAI-compatible gateways.
            timeout: Request timeout in seconds.
            client: Preconstructed client, mainly for tests.

        Raises:
            ProviderConfigInvalid: If no API key is provided or found.
        """
        super().__init__()
        self.model = model or self.default_model
        if client is not None:
            self.client = client
            return

        self.api_key = api_key or os.environ.get(self.api_key_env)
        if not self.api_key:
            raise ProviderConfigInvalid(
                f"No API key provided for {self.name}. Set {self.api_key_env} "
                "or WINE_LENS_API_KEY."
            )
        self.client = OpenAI(
            api_key=self.api_key,
            base_url=endpoint or self.default_base_url,
            timeout=timeout,
            max_retries=0,
        )

    def analyze(self, image: LabelImage) -> WineLabelAnalysis:
        data_url = f"data:{image.transport_media_type};base64,{image.to_base64()}"
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": ANALYSIS_PROMPT},
                            {"type": "image_url", "image_url": {"url": data_url, "detail": "high"}},
                        ],
                    }
                ],
                max_tokens=1000,
                temperature=0.1,
            )
        except openai.OpenAIError as e:
            raise ProviderUnavailable(f"{self.name} request failed: {e}") from e

        choices = getattr(response, "choices", None) or []
        if not choices or getattr(choices[0], "message", None) is None:
            raise ProviderResponseInvalid(f"{self.name} response has no choices")

        content = choices[0].message.content
        logger.debug("%s reply: %.500s", self.name, content)
        return self.parse_reply(content)


class AnyRouterProvider(OpenAIProvider):
    """OpenAI-compatible gateway serving Qwen vision models by default."""

    name = "anyrouter"
    api_key_env = "ANYROUTER_API_KEY"
    default_model = "qwen-vl-plus"
    default_base_url = "https://dashscope.aliyuncs.com/compatible-mode/v1"
