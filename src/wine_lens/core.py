"""Core recognition functions."""

from __future__ import annotations

import asyncio
import dataclasses
import random
from functools import lru_cache
from pathlib import Path

from PIL import Image

from wine_lens.catalog import CatalogMatcher, CatalogRepository
from wine_lens.config import RecognitionConfig
from wine_lens.fallback import FallbackController
from wine_lens.image import LabelImage
from wine_lens.recognizer import WineRecognizer
from wine_lens.schema import MatchResult, Wine

ImageInput = LabelImage | str | Path | Image.Image


@lru_cache(maxsize=1)
def default_catalog() -> CatalogRepository:
    return CatalogRepository()


def _to_label_image(image: ImageInput) -> LabelImage:
    if isinstance(image, LabelImage):
        return image
    if isinstance(image, Image.Image):
        return LabelImage.from_pil(image)
    return LabelImage.from_path(image)


def _resolve_config(
    config: RecognitionConfig | None,
    provider: str | None,
    api_key: str | None,
) -> RecognitionConfig:
    config = config or RecognitionConfig.from_env()
    overrides = {}
    if provider:
        overrides["provider"] = provider
    if api_key:
        overrides["api_key"] = api_key
    return dataclasses.replace(config, **overrides) if overrides else config


def build_recognizer(
    config: RecognitionConfig | None = None,
    *,
    catalog: CatalogRepository | None = None,
    rng: random.Random | None = None,
) -> WineRecognizer:
    """Wire a recognizer from configuration.

    Args:
        config: Recognition settings. Defaults to ``RecognitionConfig.from_env()``.
        catalog: Catalog to match against. Defaults to the packaged catalog.
        rng: Randomness for stub selection and rating jitter; seed it for
            reproducible output.
    """
    config = config or RecognitionConfig.from_env()
    catalog = catalog or default_catalog()
    controller = FallbackController(config, rng=rng)
    return WineRecognizer(controller, CatalogMatcher(catalog.wines), rating_rng=rng)


async def analyze_label_async(
    image: ImageInput,
    *,
    config: RecognitionConfig | None = None,
    provider: str | None = None,
    api_key: str | None = None,
) -> MatchResult:
    """Async variant of :func:`analyze_label`."""
    recognizer = build_recognizer(_resolve_config(config, provider, api_key))
    return await recognizer.analyze_label(_to_label_image(image))


def analyze_label(
    image: ImageInput,
    *,
    config: RecognitionConfig | None = None,
    provider: str | None = None,
    api_key: str | None = None,
) -> MatchResult:
    """Recognize a wine from a label image.

    Args:
        image: Image input - LabelImage, file path (str), Path object, or PIL Image.
        config: Recognition settings. Defaults to ``WINE_LENS_*`` env vars.
        provider: Provider name override (``openai``, ``gemini``, ``claude``, ...).
        api_key: API key override for the selected provider.

    Returns:
        MatchResult with the catalog or synthesized wine and its confidence.
    """
    return asyncio.run(
        analyze_label_async(image, config=config, provider=provider, api_key=api_key)
    )


def search_catalog(text: str, *, catalog: CatalogRepository | None = None) -> list[Wine]:
    """Search the wine catalog by free text, most relevant first."""
    return CatalogMatcher((catalog or default_catalog()).wines).search(text)
