"""Google Vision OCR provider implementation."""

from __future__ import annotations

import json
import logging
import os

from wine_lens.exceptions import ProviderConfigInvalid, ProviderUnavailable
from wine_lens.image import LabelImage
from wine_lens.providers.base import BaseProvider
from wine_lens.schema import WineLabelAnalysis


class GoogleVisionOCRProvider(BaseProvider):
    """Generic OCR fallback: Vision text detection plus heuristic line parsing."""

    name = "google"

    def __init__(self, client=None, *, api_key: str | None = None):
        super().__init__()
        self.logger = logging.getLogger(__name__)

        if client is not None:
            self.client = client
            self._vision = None
            return

        try:
            from google.cloud import vision  # type: ignore
        except Exception as exc:
            raise ProviderConfigInvalid(
                "google-cloud-vision is required for OCR mode. "
                "Install dependencies and set GOOGLE_APPLICATION_CREDENTIALS."
            ) from exc

        self._vision = vision
        try:
            credentials_json = os.getenv("GOOGLE_APPLICATION_CREDENTIALS_JSON")
            if api_key:
                self.client = vision.ImageAnnotatorClient(client_options={"api_key": api_key})
            elif credentials_json:
                from google.oauth2 import service_account  # type: ignore

                info = json.loads(credentials_json)
                credentials = service_account.Credentials.from_service_account_info(info)
                self.client = vision.ImageAnnotatorClient(credentials=credentials)
            else:
                self.client = vision.ImageAnnotatorClient()
        except Exception as exc:
            raise ProviderConfigInvalid(
                "Failed to initialize Google Vision client. "
                "Check WINE_LENS_API_KEY or GOOGLE_APPLICATION_CREDENTIALS(_JSON)."
            ) from exc

    def _extract_text(self, content: bytes) -> str:
        try:
            if self._vision is not None:
                image = self._vision.Image(content=content)
            else:
                image = {"content": content}
            response = self.client.text_detection(image=image)
        except Exception as exc:
            message = str(exc).lower()
            if "credential" in message or "permission" in message or "api key" in message:
                raise ProviderConfigInvalid(f"OCR authentication failed: {exc}") from exc
            raise ProviderUnavailable(f"OCR request failed: {exc}") from exc

        error_obj = getattr(response, "error", None)
        error_message = getattr(error_obj, "message", "") if error_obj else ""
        if error_message:
            lowered = error_message.lower()
            if "permission" in lowered or "auth" in lowered:
                raise ProviderConfigInvalid(f"OCR authentication failed: {error_message}")
            raise ProviderUnavailable(f"OCR request failed: {error_message}")

        annotations = getattr(response, "text_annotations", None) or []
        if not annotations:
            return ""
        return (getattr(annotations[0], "description", "") or "").strip()

    def analyze(self, image: LabelImage) -> WineLabelAnalysis:
        raw_text = self._extract_text(image.data)
        self.logger.debug("ocr text: %.300s", raw_text)
        return self.parse_reply(raw_text)
