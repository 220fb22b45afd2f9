# Standard library imports
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple


class ConfidenceTier(str, Enum):
    """Discretized confidence of a face comparison, strongest first."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    NO_MATCH = "No Match"

    @property
    def is_match(self) -> bool:
        return self is not ConfidenceTier.NO_MATCH

    @property
    def strength(self) -> int:
        """Ordinal strength: higher means a stronger match."""
        return _TIER_STRENGTH[self]

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ConfidenceTier"]:
        """Parse a qualitative confidence label ("high", "Medium", ...). Returns None if unknown."""
        if not value or not isinstance(value, str):
            return None
        normalized = value.strip().lower().replace("_", " ")
        for tier in cls:
            if tier.value.lower() == normalized:
                return tier
        return None


_TIER_STRENGTH = {
    ConfidenceTier.HIGH: 3,
    ConfidenceTier.MEDIUM: 2,
    ConfidenceTier.LOW: 1,
    ConfidenceTier.NO_MATCH: 0,
}


@dataclass(frozen=True)
class FaceDescriptor:
    """
    Fixed-length biometric feature vector.

    Two descriptors are comparable only when produced by the same extraction
    method and of the same length.
    """
    values: Tuple[float, ...]
    method: str

    def __post_init__(self) -> None:
        if not self.values:
            raise ValueError("Face descriptor cannot be empty")
        if not self.method:
            raise ValueError("Face descriptor extraction method is required")
        if any(not math.isfinite(v) for v in self.values):
            raise ValueError("Face descriptor contains non-finite values")

    @classmethod
    def from_sequence(cls, values: Sequence[float], method: str) -> "FaceDescriptor":
        return cls(values=tuple(float(v) for v in values), method=method)

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        # Never dump raw biometric values into logs
        return f"FaceDescriptor(method={self.method!r}, length={len(self.values)})"


@dataclass(frozen=True)
class FaceExtraction:
    """Outcome of analysing a single capture (enrollment validation)."""
    face_detected: bool
    is_valid: bool
    reason: str
    descriptor: Optional[FaceDescriptor] = None
    detection_score: Optional[float] = None


@dataclass(frozen=True)
class FaceVerdict:
    """Outcome of a 1:1 comparison between a live capture and an enrolled biometric."""
    matched: bool
    face_detected: bool
    tier: ConfidenceTier
    distance: Optional[float] = None
    reason: str = ""

    def __post_init__(self) -> None:
        # A verdict can never claim a match its tier does not support
        if self.matched and (not self.face_detected or not self.tier.is_match):
            raise ValueError("Inconsistent face verdict: matched without a detected face and match tier")
