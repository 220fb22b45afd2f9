"""Utility modules for the FacePass backend."""

from .datetime_utils import utc_now, ensure_utc, to_iso
from .image_codec import decode_image, strip_data_url, to_data_url

__all__ = [
    "utc_now",
    "ensure_utc",
    "to_iso",
    "decode_image",
    "strip_data_url",
    "to_data_url",
]
