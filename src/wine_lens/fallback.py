"""Provider selection and degrade-to-stub policy."""

from __future__ import annotations

import asyncio
import logging
import random
from io import BytesIO
from typing import Callable

from PIL import Image

from wine_lens.config import RecognitionConfig, provider_instructions
from wine_lens.exceptions import (
    NoStructuredPayloadFound,
    ProviderConfigInvalid,
    ProviderError,
    ProviderUnavailable,
)
from wine_lens.image import LabelImage
from wine_lens.providers.base import BaseProvider
from wine_lens.providers.development import DevelopmentProvider
from wine_lens.schema import WineLabelAnalysis

logger = logging.getLogger(__name__)

CONFIGURED = "configured"
DEVELOPMENT = "development"
UNCONFIGURED = "unconfigured"


def _build_openai_provider(config: RecognitionConfig) -> BaseProvider:
    from wine_lens.providers.openai_chat import OpenAIProvider

    return OpenAIProvider(
        api_key=config.api_key,
        model=config.model,
        endpoint=config.endpoint,
        timeout=config.timeout_sec,
    )


def _build_anyrouter_provider(config: RecognitionConfig) -> BaseProvider:
    from wine_lens.providers.openai_chat import AnyRouterProvider

    return AnyRouterProvider(
        api_key=config.api_key,
        model=config.model,
        endpoint=config.endpoint,
        timeout=config.timeout_sec,
    )


def _build_gemini_provider(config: RecognitionConfig) -> BaseProvider:
    from wine_lens.providers.gemini import GeminiProvider

    return GeminiProvider(api_key=config.api_key, model=config.model)


def _build_claude_provider(config: RecognitionConfig) -> BaseProvider:
    from wine_lens.providers.claude import ClaudeProvider

    return ClaudeProvider(
        api_key=config.api_key,
        model=config.model,
        endpoint=config.endpoint,
        timeout=config.timeout_sec,
    )


def _build_ocr_provider(config: RecognitionConfig) -> BaseProvider:
    from wine_lens.providers.google_vision_ocr import GoogleVisionOCRProvider

    return GoogleVisionOCRProvider(api_key=config.api_key)


def _build_custom_provider(config: RecognitionConfig) -> BaseProvider:
    from wine_lens.providers.custom import CustomProvider

    return CustomProvider(
        endpoint=config.endpoint,
        api_key=config.api_key,
        model=config.model,
        timeout=config.timeout_sec,
    )


PROVIDER_BUILDERS: dict[str, Callable[[RecognitionConfig], BaseProvider]] = {
    "openai": _build_openai_provider,
    "anyrouter": _build_anyrouter_provider,
    "gemini": _build_gemini_provider,
    "claude": _build_claude_provider,
    "google": _build_ocr_provider,
    "custom": _build_custom_provider,
}


class FallbackController:
    """Runs the configured provider and substitutes stub output when allowed.

    The adapter is resolved once, at construction. A missing credential does
    not raise here; it puts the controller in the ``unconfigured`` state and
    the stored error is replayed (or degraded) on every ``analyze`` call.
    """

    def __init__(
        self,
        config: RecognitionConfig,
        *,
        provider: BaseProvider | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config
        self.stub = DevelopmentProvider(rng=rng)
        self.provider: BaseProvider | None = None
        self.config_error: ProviderConfigInvalid | None = None

        if provider is not None:
            self.provider = provider
            self.state = DEVELOPMENT if isinstance(provider, DevelopmentProvider) else CONFIGURED
        elif config.is_development:
            self.provider = self.stub
            self.state = DEVELOPMENT
        else:
            try:
                self.provider = PROVIDER_BUILDERS[config.provider](config)
                self.state = CONFIGURED
            except ProviderConfigInvalid as exc:
                self.config_error = exc
                self.state = UNCONFIGURED
                logger.warning(
                    "provider %s is not configured: %s. %s",
                    config.provider,
                    exc,
                    provider_instructions(config.provider),
                )
        logger.info("analysis provider=%s state=%s", config.provider, self.state)

    @property
    def active_provider(self) -> BaseProvider | None:
        return self.provider

    async def analyze(self, image: LabelImage) -> WineLabelAnalysis:
        """Analyze one label, degrading to the stub on provider failure.

        Raises:
            ProviderError: When the provider fails and fallback is disabled
            NoStructuredPayloadFound: When the reply held nothing parseable
        """
        if self.state == DEVELOPMENT:
            return await self._call_provider(self.provider, image)

        try:
            if self.state == UNCONFIGURED:
                raise self.config_error
            return await self._call_provider(self.provider, image)
        except NoStructuredPayloadFound:
            raise
        except ProviderError as exc:
            if not self.config.enable_fallback:
                raise
            logger.warning(
                "provider %s failed (%s: %s); using development output",
                self.config.provider,
                type(exc).__name__,
                exc,
            )
            return self.stub.analyze(image)

    async def _call_provider(self, provider: BaseProvider, image: LabelImage) -> WineLabelAnalysis:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(provider.analyze, image),
                timeout=self.config.timeout_sec,
            )
        except asyncio.TimeoutError as exc:
            raise ProviderUnavailable(
                f"{provider.name} did not answer within {self.config.timeout_sec:g}s"
            ) from exc

    async def check(self) -> bool:
        """Send a 1x1 white image straight to the provider, without fallback.

        A reply with nothing parseable still counts as reachable.
        """
        if self.state == DEVELOPMENT:
            return True
        if self.state == UNCONFIGURED:
            logger.warning("provider %s check failed: %s", self.config.provider, self.config_error)
            return False

        with BytesIO() as buffer:
            Image.new("RGB", (1, 1), color="white").save(buffer, format="JPEG")
            image = LabelImage(data=buffer.getvalue(), media_type="image/jpeg", filename="check.jpg")
        try:
            await self._call_provider(self.provider, image)
        except NoStructuredPayloadFound:
            return True
        except ProviderError as exc:
            logger.warning("provider %s check failed: %s", self.config.provider, exc)
            return False
        return True
