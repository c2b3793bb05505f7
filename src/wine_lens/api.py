"""HTTP API for wine-lens."""

import base64
from functools import lru_cache
from io import BytesIO
import logging
import os

from fastapi import Depends, FastAPI, File, HTTPException, Query, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel

from wine_lens import __version__
from wine_lens.catalog import CatalogMatcher
from wine_lens.config import RecognitionConfig
from wine_lens.core import default_catalog, build_recognizer
from wine_lens.exceptions import InvalidImage, ProviderError
from wine_lens.image import ALLOWED_MEDIA_TYPES, MAX_IMAGE_BYTES, LabelImage
from wine_lens.recognizer import WineRecognizer
from wine_lens.schema import MatchResult, Wine

app = FastAPI(title="wine-lens API", version=__version__)
logger = logging.getLogger(__name__)

raw_origins = os.getenv("FRONTEND_ORIGINS", "*")
allow_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class AnalyzeRequest(BaseModel):
    imageBase64: str


class CatalogHit(BaseModel):
    wine: Wine
    score: int


class CatalogSearchResponse(BaseModel):
    query: str
    total: int
    results: list[CatalogHit]


@lru_cache(maxsize=1)
def get_recognizer() -> WineRecognizer:
    return build_recognizer(RecognitionConfig.from_env())


@lru_cache(maxsize=1)
def get_matcher() -> CatalogMatcher:
    return CatalogMatcher(default_catalog().wines)


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


def _validate_payload_size(payload: bytes) -> None:
    if len(payload) > MAX_IMAGE_BYTES:
        raise HTTPException(status_code=413, detail="image too large")


def _validate_multipart_content_type(content_type: str | None) -> str:
    if not content_type:
        raise HTTPException(status_code=400, detail="image file is required")
    normalized = content_type.split(";")[0].strip().lower()
    if normalized not in ALLOWED_MEDIA_TYPES:
        raise HTTPException(status_code=400, detail="unsupported image content type")
    return normalized


def _sniff_media_type(payload: bytes) -> str:
    try:
        with Image.open(BytesIO(payload)) as image:
            fmt = (image.format or "").lower()
    except (UnidentifiedImageError, OSError) as exc:
        raise HTTPException(status_code=400, detail="invalid image format") from exc
    return f"image/{fmt}"


def _decode_base64_image(image_base64: str) -> LabelImage:
    value = image_base64.strip()
    if not value:
        raise HTTPException(status_code=400, detail="imageBase64 is required")

    media_type = None
    # Support data URL format: data:image/jpeg;base64,<payload>
    if value.startswith("data:"):
        header, sep, value = value.partition(",")
        if not sep:
            raise HTTPException(status_code=400, detail="invalid imageBase64 data URL")
        media_type = header[len("data:"):].split(";")[0] or None

    try:
        payload = base64.b64decode(value, validate=True)
    except Exception as exc:
        raise HTTPException(status_code=400, detail="invalid imageBase64 encoding") from exc

    if not payload:
        raise HTTPException(status_code=400, detail="empty file")
    _validate_payload_size(payload)

    return LabelImage(data=payload, media_type=media_type or _sniff_media_type(payload))


@app.post("/analyze", response_model=MatchResult)
async def analyze(
    request: Request,
    image: UploadFile | None = File(default=None),
    recognizer: WineRecognizer = Depends(get_recognizer),
) -> MatchResult:
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            body = AnalyzeRequest.model_validate(await request.json())
        except Exception as exc:
            raise HTTPException(status_code=400, detail="imageBase64 is required in JSON body") from exc
        label = _decode_base64_image(body.imageBase64)
    else:
        if image is None:
            raise HTTPException(status_code=400, detail="image file is required")
        media_type = _validate_multipart_content_type(image.content_type)
        payload = await image.read()
        if not payload:
            raise HTTPException(status_code=400, detail="empty file")
        _validate_payload_size(payload)
        label = LabelImage(data=payload, media_type=media_type, filename=image.filename)

    try:
        return await recognizer.analyze_label(label)
    except InvalidImage as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ProviderError as exc:
        logger.warning("analysis failed: %s", exc)
        raise HTTPException(status_code=502, detail="analysis_failed") from exc
    except Exception as exc:
        logger.exception("analyze failed")
        raise HTTPException(status_code=500, detail="internal_error") from exc


@app.get("/catalog/search", response_model=CatalogSearchResponse)
def catalog_search(
    q: str = Query(default=""),
    matcher: CatalogMatcher = Depends(get_matcher),
) -> CatalogSearchResponse:
    ranked = matcher.rank(q)
    return CatalogSearchResponse(
        query=q,
        total=len(ranked),
        results=[CatalogHit(wine=item.wine, score=item.score) for item in ranked],
    )
