"""Label image input and upload preconditions."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from wine_lens.exceptions import InvalidImage

MAX_IMAGE_BYTES = 10 * 1024 * 1024
ALLOWED_MEDIA_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})

_PIL_MEDIA_TYPES = {"JPEG": "image/jpeg", "PNG": "image/png", "WEBP": "image/webp"}


@dataclass(frozen=True)
class LabelImage:
    """Binary label image with its declared media type."""

    data: bytes
    media_type: str
    filename: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def normalized_media_type(self) -> str:
        return self.media_type.split(";")[0].strip().lower()

    @property
    def transport_media_type(self) -> str:
        media_type = self.normalized_media_type
        return "image/jpeg" if media_type == "image/jpg" else media_type

    def to_base64(self) -> str:
        return base64.standard_b64encode(self.data).decode("utf-8")

    @classmethod
    def from_path(cls, path: str | Path) -> LabelImage:
        """Load an image file, detecting its media type with Pillow."""
        path = Path(path)
        if not path.exists():
            raise InvalidImage(f"Image file not found: {path}")

        data = path.read_bytes()
        try:
            with Image.open(BytesIO(data)) as image:
                fmt = (image.format or "").upper()
        except (UnidentifiedImageError, OSError) as e:
            raise InvalidImage(f"Failed to open image: {e}") from e

        media_type = _PIL_MEDIA_TYPES.get(fmt, f"image/{fmt.lower() or 'unknown'}")
        return cls(data=data, media_type=media_type, filename=path.name)

    @classmethod
    def from_pil(cls, image: Image.Image) -> LabelImage:
        """Encode a PIL image, keeping JPEG/PNG/WEBP and re-encoding anything else as PNG."""
        fmt = (image.format or "PNG").upper()
        if fmt not in _PIL_MEDIA_TYPES:
            fmt = "PNG"
        if fmt == "JPEG" and image.mode in ("RGBA", "P"):
            image = image.convert("RGB")
        with BytesIO() as buffer:
            image.save(buffer, format=fmt)
            data = buffer.getvalue()
        return cls(data=data, media_type=_PIL_MEDIA_TYPES[fmt])


def validate_label_image(image: LabelImage) -> None:
    """Check media type and size before any provider is contacted.

    Raises:
        InvalidImage: If the type is not allowed, or the payload is empty or too large.
    """
    if image.normalized_media_type not in ALLOWED_MEDIA_TYPES:
        raise InvalidImage(f"Unsupported image type: {image.media_type or 'unknown'}")
    if image.size == 0:
        raise InvalidImage("Image is empty")
    if image.size > MAX_IMAGE_BYTES:
        raise InvalidImage(
            f"Image too large: {image.size} bytes (limit {MAX_IMAGE_BYTES} bytes)"
        )
