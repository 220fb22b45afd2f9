"""
Descriptor comparison and confidence classification.

Distance is Euclidean between two descriptors of the same extraction method
and length. Tier bounds are strict upper bounds:

    distance < high    -> HIGH
    distance < medium  -> MEDIUM
    distance < low     -> LOW
    otherwise          -> NO_MATCH

LOW is still a match. The bounds trade false rejections against false
admissions and are configuration, not constants of nature.
"""
# Standard library imports
import math
from dataclasses import dataclass

# External package imports
import numpy as np

# Local application imports
from ..exceptions import IncompatibleDescriptorError
from ..models.face import ConfidenceTier, FaceDescriptor, FaceVerdict


@dataclass(frozen=True)
class MatchThresholds:
    high: float = 0.40
    medium: float = 0.50
    low: float = 0.60

    def __post_init__(self) -> None:
        if not (0 < self.high < self.medium < self.low):
            raise ValueError(
                f"Match thresholds must be positive and strictly increasing, "
                f"got high={self.high} medium={self.medium} low={self.low}"
            )

    @classmethod
    def from_settings(cls, settings) -> "MatchThresholds":
        return cls(
            high=settings.face_match_threshold_high,
            medium=settings.face_match_threshold_medium,
            low=settings.face_match_threshold_low,
        )


def compare(a: FaceDescriptor, b: FaceDescriptor) -> float:
    """
    Euclidean distance between two descriptors.

    Raises:
        IncompatibleDescriptorError: If the descriptors differ in method or length
    """
    if a.method != b.method:
        raise IncompatibleDescriptorError(
            f"Descriptor methods differ: {a.method} vs {b.method}",
            details={"left_method": a.method, "right_method": b.method},
        )
    if len(a) != len(b):
        raise IncompatibleDescriptorError(
            f"Descriptor lengths differ: {len(a)} vs {len(b)}",
            details={"left_length": len(a), "right_length": len(b)},
        )
    left = np.asarray(a.values, dtype=np.float64)
    right = np.asarray(b.values, dtype=np.float64)
    return float(np.linalg.norm(left - right))


def classify(distance: float, thresholds: MatchThresholds = MatchThresholds()) -> ConfidenceTier:
    """Map a distance onto a confidence tier. Negative or NaN distances are NO_MATCH."""
    if distance is None or math.isnan(distance) or distance < 0:
        return ConfidenceTier.NO_MATCH
    if distance < thresholds.high:
        return ConfidenceTier.HIGH
    if distance < thresholds.medium:
        return ConfidenceTier.MEDIUM
    if distance < thresholds.low:
        return ConfidenceTier.LOW
    return ConfidenceTier.NO_MATCH


def evaluate(
    live: FaceDescriptor,
    enrolled: FaceDescriptor,
    thresholds: MatchThresholds = MatchThresholds(),
) -> FaceVerdict:
    """Compare a live descriptor with the enrolled one and build a verdict."""
    distance = compare(live, enrolled)
    tier = classify(distance, thresholds)
    return FaceVerdict(
        matched=tier.is_match,
        face_detected=True,
        tier=tier,
        distance=distance,
        reason=f"distance={distance:.4f}",
    )
