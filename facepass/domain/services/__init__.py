from .comparator import MatchThresholds, classify, compare, evaluate
from .face_verifier import FaceVerifier
from . import ticket_lifecycle

__all__ = [
    "MatchThresholds",
    "classify",
    "compare",
    "evaluate",
    "FaceVerifier",
    "ticket_lifecycle",
]
