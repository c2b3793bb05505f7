"""Shared fixtures for wine-lens tests."""

import pytest

from wine_lens.image import LabelImage
from wine_lens.providers.base import BaseProvider


class ScriptedProvider(BaseProvider):
    """Provider double that returns a fixed analysis or raises a fixed error."""

    name = "scripted"

    def __init__(self, result=None, error=None):
        super().__init__()
        self.result = result
        self.error = error
        self.calls = []

    def analyze(self, image):
        self.calls.append(image)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def label_image():
    return LabelImage(data=b"\xff\xd8\xff\xe0fake-jpeg", media_type="image/jpeg", filename="label.jpg")


@pytest.fixture
def scripted_provider():
    return ScriptedProvider


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "WINE_LENS_PROVIDER",
        "WINE_LENS_API_KEY",
        "WINE_LENS_ENDPOINT",
        "WINE_LENS_MODEL",
        "WINE_LENS_ENABLE_FALLBACK",
        "WINE_LENS_TIMEOUT_SEC",
        "OPENAI_API_KEY",
        "ANYROUTER_API_KEY",
        "GEMINI_API_KEY",
        "ANTHROPIC_API_KEY",
        "CUSTOM_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
