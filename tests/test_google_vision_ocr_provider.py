"""Tests for Google Vision OCR provider parsing."""

from types import SimpleNamespace

import pytest

from wine_lens.exceptions import NoStructuredPayloadFound, ProviderConfigInvalid, ProviderUnavailable
from wine_lens.providers.google_vision_ocr import GoogleVisionOCRProvider


class MockOCRClient:
    def __init__(self, description="", error_message="", exc=None):
        self.description = description
        self.error_message = error_message
        self.exc = exc
        self.images = []

    def text_detection(self, image):
        self.images.append(image)
        if self.exc is not None:
            raise self.exc
        annotations = [SimpleNamespace(description=self.description)] if self.description else []
        return SimpleNamespace(
            text_annotations=annotations,
            error=SimpleNamespace(message=self.error_message),
        )


def test_analyze_parses_ocr_text(label_image):
    client = MockOCRClient(
        description="""CLOUDY BAY
Sauvignon Blanc
Marlborough New Zealand
2022
13.5% vol"""
    )
    provider = GoogleVisionOCRProvider(client=client)

    analysis = provider.analyze(label_image)
    metadata = provider.get_analysis_metadata()

    assert analysis.wine_name == "CLOUDY BAY"
    assert analysis.producer == "Sauvignon Blanc"
    assert analysis.region == "Marlborough New Zealand"
    assert analysis.vintage == "2022"
    assert analysis.grape_varieties == ["Sauvignon Blanc"]
    assert analysis.alcohol_content == "13.5%"
    assert metadata == {"provider": "google", "parser": "heuristic_lines"}
    assert client.images == [{"content": label_image.data}]


def test_analyze_without_text_raises_no_payload(label_image):
    provider = GoogleVisionOCRProvider(client=MockOCRClient())
    with pytest.raises(NoStructuredPayloadFound):
        provider.analyze(label_image)
    assert provider.get_analysis_metadata()["parser"] == "unparsed"


def test_response_error_is_unavailable(label_image):
    provider = GoogleVisionOCRProvider(client=MockOCRClient(error_message="quota exceeded"))
    with pytest.raises(ProviderUnavailable, match="quota exceeded"):
        provider.analyze(label_image)


def test_permission_error_is_config_invalid(label_image):
    provider = GoogleVisionOCRProvider(client=MockOCRClient(error_message="PERMISSION_DENIED: api disabled"))
    with pytest.raises(ProviderConfigInvalid):
        provider.analyze(label_image)


def test_client_exception_is_unavailable(label_image):
    provider = GoogleVisionOCRProvider(client=MockOCRClient(exc=RuntimeError("deadline exceeded")))
    with pytest.raises(ProviderUnavailable):
        provider.analyze(label_image)
