"""Providers for wine-lens."""

from wine_lens.providers.base import ANALYSIS_PROMPT, BaseProvider
from wine_lens.providers.claude import ClaudeProvider
from wine_lens.providers.custom import CustomProvider
from wine_lens.providers.development import DevelopmentProvider
from wine_lens.providers.gemini import GeminiProvider
from wine_lens.providers.google_vision_ocr import GoogleVisionOCRProvider
from wine_lens.providers.openai_chat import AnyRouterProvider, OpenAIProvider

__all__ = [
    "ANALYSIS_PROMPT",
    "AnyRouterProvider",
    "BaseProvider",
    "ClaudeProvider",
    "CustomProvider",
    "DevelopmentProvider",
    "GeminiProvider",
    "GoogleVisionOCRProvider",
    "OpenAIProvider",
]
