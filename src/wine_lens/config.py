"""Provider selection configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal, cast

Provider = Literal["development", "openai", "google", "gemini", "claude", "anyrouter", "custom"]

PROVIDERS: tuple[str, ...] = ("development", "openai", "google", "gemini", "claude", "anyrouter", "custom")

_PROVIDER_ALIASES = {
    "dev": "development",
    "stub": "development",
    "mock": "development",
    "ocr": "google",
    "google_vision_ocr": "google",
    "google-vision-ocr": "google",
    "vision": "google",
    "anthropic": "claude",
}

DEFAULT_TIMEOUT_SEC = 30.0

_PROVIDER_INSTRUCTIONS = {
    "openai": (
        "To configure OpenAI vision: set WINE_LENS_PROVIDER=openai and "
        "WINE_LENS_API_KEY (or OPENAI_API_KEY). Optionally set WINE_LENS_MODEL."
    ),
    "google": (
        "To configure Google Vision OCR: enable the Vision API, then set "
        "WINE_LENS_PROVIDER=google and either WINE_LENS_API_KEY or "
        "GOOGLE_APPLICATION_CREDENTIALS."
    ),
    "gemini": (
        "To configure Gemini: set WINE_LENS_PROVIDER=gemini and "
        "WINE_LENS_API_KEY (or GEMINI_API_KEY). Optionally set WINE_LENS_MODEL."
    ),
    "claude": (
        "To configure Claude vision: set WINE_LENS_PROVIDER=claude and "
        "WINE_LENS_API_KEY (or ANTHROPIC_API_KEY). Optionally set WINE_LENS_MODEL."
    ),
    "anyrouter": (
        "To configure an OpenAI-compatible gateway: set WINE_LENS_PROVIDER=anyrouter, "
        "WINE_LENS_API_KEY (or ANYROUTER_API_KEY) and optionally WINE_LENS_ENDPOINT "
        "and WINE_LENS_MODEL."
    ),
    "custom": (
        "To configure a custom service: set WINE_LENS_PROVIDER=custom, "
        "WINE_LENS_ENDPOINT and WINE_LENS_API_KEY. The endpoint receives "
        '{"image": <base64>, "task": "wine_label_analysis", "model": <model>}.'
    ),
}


def normalize_provider(value: str | None) -> Provider:
    """Map a provider name or alias to its canonical identifier."""
    name = (value or "development").strip().lower() or "development"
    name = _PROVIDER_ALIASES.get(name, name)
    if name not in PROVIDERS:
        raise ValueError(f"Unsupported provider: {name}")
    return cast(Provider, name)


def provider_instructions(provider: str) -> str:
    """Return setup help for a provider, or an empty string for the stub."""
    return _PROVIDER_INSTRUCTIONS.get(provider, "")


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _safe_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class RecognitionConfig:
    provider: Provider = "development"
    api_key: str | None = None
    endpoint: str | None = None
    model: str | None = None
    enable_fallback: bool = True
    timeout_sec: float = DEFAULT_TIMEOUT_SEC

    def __post_init__(self) -> None:
        object.__setattr__(self, "provider", normalize_provider(self.provider))
        if self.timeout_sec <= 0:
            object.__setattr__(self, "timeout_sec", DEFAULT_TIMEOUT_SEC)

    @property
    def is_development(self) -> bool:
        return self.provider == "development"

    @classmethod
    def from_env(cls) -> "RecognitionConfig":
        return cls(
            provider=normalize_provider(os.getenv("WINE_LENS_PROVIDER")),
            api_key=os.getenv("WINE_LENS_API_KEY") or None,
            endpoint=os.getenv("WINE_LENS_ENDPOINT") or None,
            model=os.getenv("WINE_LENS_MODEL") or None,
            enable_fallback=_parse_bool(os.getenv("WINE_LENS_ENABLE_FALLBACK"), True),
            timeout_sec=_safe_float(os.getenv("WINE_LENS_TIMEOUT_SEC"), DEFAULT_TIMEOUT_SEC),
        )
