"""Interchangeable FaceVerifier implementations"""

from .deepface_verifier import DeepFaceVerifier
from .groq_face_judge import GroqFaceJudge

__all__ = [
    "DeepFaceVerifier",
    "GroqFaceJudge",
]
