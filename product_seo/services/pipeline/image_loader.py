from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from ...contracts_models import ProductImage
from ..errors import InputValidationError


@dataclass(frozen=True)
class ImageAsset:
    data: bytes
    mime_type: str
    name: str | None = None


def _decode_base64(value: str) -> bytes:
    try:
        if value.startswith("data:"):
            _, encoded = value.split(",", 1)
        else:
            encoded = value
        return base64.b64decode("".join(encoded.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InputValidationError(
            "Failed to decode base64 image payload.",
            code="INVALID_IMAGE",
        ) from exc


# Gemini accepts these, Pillow cannot open them without a plugin.
PASSTHROUGH_MIME_TYPES = frozenset(
    {"image/heic", "image/heif", "image/heic-sequence", "image/heif-sequence"}
)


def _verify_image(raw: bytes) -> None:
    try:
        with Image.open(BytesIO(raw)) as image:
            image.verify()
    except Image.DecompressionBombError as exc:
        raise InputValidationError(
            "Image dimensions are too large.",
            code="INVALID_IMAGE",
        ) from exc
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise InputValidationError(
            "Image payload is not a readable image.",
            code="INVALID_IMAGE",
        ) from exc


def load_image(image: ProductImage | None) -> ImageAsset | None:
    if image is None:
        return None
    raw = _decode_base64(image.base64)
    if not raw:
        raise InputValidationError("Image payload is empty.", code="INVALID_IMAGE")
    if image.mime_type not in PASSTHROUGH_MIME_TYPES:
        _verify_image(raw)
    return ImageAsset(data=raw, mime_type=image.mime_type, name=image.name)
