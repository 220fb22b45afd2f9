"""
Capture payload decoding.

Captures arrive as base64 strings, optionally wrapped in a data URL
("data:image/jpeg;base64,..."). The core does not validate the image format
beyond what the decoder can read; an unreadable payload is treated as a
capture without a usable face.
"""
import base64
import binascii
import logging
from io import BytesIO

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..domain.exceptions import NoFaceDetectedError

logger = logging.getLogger(__name__)


def strip_data_url(payload: str) -> str:
    """Return the bare base64 part of a data URL (or the payload unchanged)."""
    if payload.startswith("data:") and "," in payload:
        return payload.split(",", 1)[1]
    return payload


def to_data_url(payload: str, mime_type: str = "image/jpeg") -> str:
    if payload.startswith("data:"):
        return payload
    return f"data:{mime_type};base64,{payload}"


def decode_image(payload: str) -> np.ndarray:
    """
    Decode a base64 capture into an RGB uint8 array of shape (H, W, 3).

    Raises:
        NoFaceDetectedError: If the payload is empty or not a readable image
    """
    if not payload or not isinstance(payload, str):
        raise NoFaceDetectedError("Empty capture payload")

    try:
        raw = base64.b64decode(strip_data_url(payload).strip(), validate=False)
        with Image.open(BytesIO(raw)) as img:
            rgb = img.convert("RGB")
            return np.asarray(rgb, dtype=np.uint8)
    except (binascii.Error, UnidentifiedImageError, OSError, ValueError) as e:
        logger.info(f"Capture payload could not be decoded: {e}")
        raise NoFaceDetectedError(
            f"Unreadable capture payload: {e}",
            user_message="Could not read the captured image. Please try again.",
        )
