"""Tests for provider selection and fallback."""

import asyncio
import logging
import random
import time
from types import SimpleNamespace

import httpx
import pytest

from wine_lens.config import RecognitionConfig
from wine_lens.exceptions import (
    NoStructuredPayloadFound,
    ProviderConfigInvalid,
    ProviderResponseInvalid,
    ProviderUnavailable,
)
from wine_lens.fallback import FallbackController
from wine_lens.providers.base import BaseProvider
from wine_lens.providers.development import EXEMPLARS, DevelopmentProvider
from wine_lens.providers.gemini import GeminiProvider
from wine_lens.schema import WineLabelAnalysis

EXEMPLAR_NAMES = {exemplar["wine_name"] for exemplar in EXEMPLARS}


class SlowProvider(BaseProvider):
    name = "slow"

    def __init__(self, delay):
        super().__init__()
        self.delay = delay

    def analyze(self, image):
        time.sleep(self.delay)
        return WineLabelAnalysis(wine_name="Too Late")


@pytest.mark.asyncio
async def test_development_state_uses_stub(label_image):
    controller = FallbackController(RecognitionConfig(), rng=random.Random(1))

    analysis = await controller.analyze(label_image)

    assert controller.state == "development"
    assert isinstance(controller.active_provider, DevelopmentProvider)
    assert analysis.wine_name in EXEMPLAR_NAMES


@pytest.mark.asyncio
async def test_configured_provider_result_is_returned(label_image, scripted_provider):
    provider = scripted_provider(result=WineLabelAnalysis(wine_name="Barolo Brunate"))
    controller = FallbackController(RecognitionConfig(provider="openai"), provider=provider)

    analysis = await controller.analyze(label_image)

    assert controller.state == "configured"
    assert analysis.wine_name == "Barolo Brunate"
    assert provider.calls == [label_image]


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [ProviderUnavailable("down"), ProviderResponseInvalid("garbled")])
async def test_failure_degrades_to_stub_when_enabled(label_image, scripted_provider, error, caplog):
    provider = scripted_provider(error=error)
    controller = FallbackController(RecognitionConfig(provider="openai"), provider=provider)

    with caplog.at_level(logging.WARNING, logger="wine_lens.fallback"):
        analysis = await controller.analyze(label_image)

    assert analysis.wine_name in EXEMPLAR_NAMES
    assert "using development output" in caplog.text


@pytest.mark.asyncio
async def test_failure_propagates_when_fallback_disabled(label_image, scripted_provider):
    error = ProviderUnavailable("down")
    controller = FallbackController(
        RecognitionConfig(provider="openai", enable_fallback=False),
        provider=scripted_provider(error=error),
    )

    with pytest.raises(ProviderUnavailable) as excinfo:
        await controller.analyze(label_image)
    assert excinfo.value is error


@pytest.mark.asyncio
async def test_no_structured_payload_passes_through(label_image, scripted_provider):
    provider = scripted_provider(error=NoStructuredPayloadFound("nothing", raw_text="smudged"))
    controller = FallbackController(RecognitionConfig(provider="claude"), provider=provider)

    with pytest.raises(NoStructuredPayloadFound):
        await controller.analyze(label_image)


@pytest.mark.asyncio
async def test_missing_credentials_degrade_or_fail(label_image, caplog):
    with caplog.at_level(logging.WARNING, logger="wine_lens.fallback"):
        degraded = FallbackController(RecognitionConfig(provider="openai"))
    assert degraded.state == "unconfigured"
    assert "WINE_LENS_PROVIDER=openai" in caplog.text
    assert (await degraded.analyze(label_image)).wine_name in EXEMPLAR_NAMES

    failing = FallbackController(RecognitionConfig(provider="openai", enable_fallback=False))
    with pytest.raises(ProviderConfigInvalid):
        await failing.analyze(label_image)


@pytest.mark.asyncio
async def test_timeout_becomes_unavailable(label_image):
    controller = FallbackController(
        RecognitionConfig(provider="gemini", enable_fallback=False, timeout_sec=0.05),
        provider=SlowProvider(delay=0.3),
    )

    with pytest.raises(ProviderUnavailable, match="did not answer"):
        await controller.analyze(label_image)


@pytest.mark.asyncio
async def test_timeout_degrades_when_enabled(label_image):
    controller = FallbackController(
        RecognitionConfig(provider="gemini", timeout_sec=0.05),
        provider=SlowProvider(delay=0.3),
    )

    assert (await controller.analyze(label_image)).wine_name in EXEMPLAR_NAMES


@pytest.mark.asyncio
async def test_cancellation_is_not_swallowed(label_image):
    controller = FallbackController(
        RecognitionConfig(provider="gemini", timeout_sec=5),
        provider=SlowProvider(delay=0.3),
    )

    task = asyncio.create_task(controller.analyze(label_image))
    await asyncio.sleep(0.05)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task


def test_builder_mapping_resolves_provider_once(mocker, scripted_provider):
    provider = scripted_provider(result=WineLabelAnalysis(wine_name="x"))
    builder = mocker.Mock(return_value=provider)
    mocker.patch.dict("wine_lens.fallback.PROVIDER_BUILDERS", {"claude": builder})
    config = RecognitionConfig(provider="claude", api_key="key")

    controller = FallbackController(config)

    assert controller.state == "configured"
    assert controller.active_provider is provider
    builder.assert_called_once_with(config)


@pytest.mark.asyncio
async def test_gemini_network_outage_degrades_to_stub(label_image):
    def generate_content(**kwargs):
        raise httpx.ConnectError("connection refused")

    provider = GeminiProvider(client=SimpleNamespace(models=SimpleNamespace(generate_content=generate_content)))
    controller = FallbackController(RecognitionConfig(provider="gemini"), provider=provider, rng=random.Random(2))

    assert (await controller.analyze(label_image)).wine_name in EXEMPLAR_NAMES


@pytest.mark.asyncio
async def test_check_reports_provider_reachability(scripted_provider):
    assert await FallbackController(RecognitionConfig()).check() is True

    healthy = scripted_provider(result=WineLabelAnalysis(wine_name="x"))
    assert await FallbackController(RecognitionConfig(provider="openai"), provider=healthy).check() is True
    assert healthy.calls[0].media_type == "image/jpeg"

    empty = scripted_provider(error=NoStructuredPayloadFound("blank", raw_text=""))
    assert await FallbackController(RecognitionConfig(provider="claude"), provider=empty).check() is True

    down = scripted_provider(error=ProviderUnavailable("down"))
    assert await FallbackController(RecognitionConfig(provider="openai"), provider=down).check() is False

    assert await FallbackController(RecognitionConfig(provider="openai")).check() is False
