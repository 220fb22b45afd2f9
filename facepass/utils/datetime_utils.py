"""
Centralized DateTime Utilities
==============================

All persisted timestamps are timezone-aware UTC. Display conversion uses the
timezone configured in facepass.core.config (LOCAL_TIMEZONE).

Functions:
- utc_now(): current UTC time (for MongoDB BSON dates and session expiry)
- ensure_utc(): normalize naive/aware datetimes to aware UTC
- to_iso(): datetime -> ISO 8601 string in the application timezone
"""
import logging
import zoneinfo
from datetime import datetime, timezone as dt_timezone
from typing import Optional

from ..core.config import get_settings

logger = logging.getLogger(__name__)


def _get_app_timezone():
    """
    Get the application timezone from config.
    Returns timezone object (defaults to UTC if invalid).
    """
    tz_str = get_settings().local_timezone

    if tz_str.upper() == "UTC":
        return dt_timezone.utc

    try:
        return zoneinfo.ZoneInfo(tz_str)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Invalid timezone '{tz_str}', falling back to UTC")
        return dt_timezone.utc


def utc_now() -> datetime:
    """
    Get current UTC time as a timezone-aware datetime.

    Use this for all timestamps that will be persisted to MongoDB (BSON Date).
    """
    return datetime.now(dt_timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime into a timezone-aware UTC datetime.

    - If dt is None -> None
    - If dt is naive -> assume it represents UTC (this matches MongoDB/PyMongo behavior)
    - If dt is aware -> convert to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_timezone.utc)
    return dt.astimezone(dt_timezone.utc)


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime object to ISO 8601 string in the application timezone.
    Naive datetimes are treated as UTC (MongoDB convention).
    """
    if dt is None:
        return None

    dt = ensure_utc(dt).astimezone(_get_app_timezone())
    if dt.utcoffset() is not None and dt.utcoffset().total_seconds() == 0:
        return dt.replace(microsecond=0).isoformat().replace("+00:00", "Z")
    return dt.replace(microsecond=0).isoformat()

