"""
Local face verification using DeepFace embeddings.

Enrollment extracts one descriptor per capture; the gate extracts a live
descriptor and compares it with the ticket's enrolled descriptor using the
Euclidean comparator. The model runs in a worker thread under a hard timeout
so a stuck inference never blocks the event loop or hangs a gate.
"""
# Standard library imports
import asyncio
import logging
from typing import Any, Dict, List, Optional

# External package imports
import numpy as np

# Local application imports
from ...core.config import get_settings
from ...domain.exceptions import IncompatibleDescriptorError, ServiceUnavailableError
from ...domain.models.face import ConfidenceTier, FaceDescriptor, FaceExtraction, FaceVerdict
from ...domain.models.ticket import Ticket
from ...domain.services.comparator import MatchThresholds, evaluate
from ...domain.services.face_verifier import FaceVerifier
from ...utils.image_codec import decode_image

logger = logging.getLogger(__name__)


def _get_deepface():
    try:
        from deepface import DeepFace
        return DeepFace
    except ImportError:
        return None


def _pick_largest_face(objs: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Pick the face with the largest area (main subject in front of the camera)."""
    best = None
    best_area = -1
    for obj in objs or []:
        if obj.get("embedding") is None:
            continue
        area = obj.get("facial_area") or {}
        a = int(area.get("w", 0)) * int(area.get("h", 0))
        if a > best_area:
            best_area = a
            best = obj
    return best


def l2_normalize(embedding) -> List[float]:
    """Scale an embedding to unit length so distance bounds are model independent."""
    vector = np.asarray(embedding, dtype=np.float64)
    norm = float(np.linalg.norm(vector))
    if not np.isfinite(norm) or norm == 0.0:
        raise ValueError("embedding has zero or non-finite norm")
    return (vector / norm).tolist()


class DeepFaceVerifier(FaceVerifier):
    """FaceVerifier backed by a local DeepFace embedding model."""

    uses_descriptors = True

    def __init__(
        self,
        model_name: Optional[str] = None,
        detector_backend: Optional[str] = None,
        thresholds: Optional[MatchThresholds] = None,
        min_detection_score: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self.model_name = model_name or settings.face_embedding_model
        self.detector_backend = detector_backend or settings.face_detector_backend
        self.thresholds = thresholds or MatchThresholds.from_settings(settings)
        self.min_detection_score = (
            min_detection_score if min_detection_score is not None else settings.face_min_detection_score
        )
        self.timeout = timeout if timeout is not None else settings.verifier_timeout_seconds

    @property
    def descriptor_method(self) -> str:
        return f"deepface:{self.model_name}:l2"

    def _represent(self, image_rgb) -> List[Dict[str, Any]]:
        """Blocking DeepFace call. Returns [] when no face is found."""
        DeepFace = _get_deepface()
        if DeepFace is None:
            raise ServiceUnavailableError("DeepFace not available; install deepface.")
        try:
            return DeepFace.represent(
                img_path=np.ascontiguousarray(image_rgb[:, :, ::-1]),  # DeepFace expects BGR
                model_name=self.model_name,
                detector_backend=self.detector_backend,
                enforce_detection=True,
            ) or []
        except ValueError as e:
            # enforce_detection raises ValueError when no face is found
            logger.debug(f"DeepFace found no face: {e}")
            return []

    async def _detect(self, image: str) -> FaceExtraction:
        image_rgb = decode_image(image)
        try:
            objs = await asyncio.wait_for(asyncio.to_thread(self._represent, image_rgb), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"DeepFace extraction timed out after {self.timeout}s")
            raise ServiceUnavailableError(f"Face extraction timed out after {self.timeout}s")
        except ServiceUnavailableError:
            raise
        except Exception as e:
            logger.error(f"DeepFace extraction failed: {e}", exc_info=True)
            raise ServiceUnavailableError(f"Face extraction failed: {e}")

        face = _pick_largest_face(objs)
        if face is None:
            return FaceExtraction(face_detected=False, is_valid=False, reason="No face detected in image")

        try:
            descriptor = FaceDescriptor.from_sequence(l2_normalize(face["embedding"]), self.descriptor_method)
        except (TypeError, ValueError) as e:
            raise ServiceUnavailableError(f"Face extraction returned a malformed embedding: {e}")

        score = face.get("face_confidence")
        return FaceExtraction(
            face_detected=True,
            is_valid=True,
            reason="Face detected",
            descriptor=descriptor,
            detection_score=float(score) if score is not None else None,
        )

    async def extract(self, image: str) -> FaceExtraction:
        detection = await self._detect(image)
        if not detection.face_detected:
            return FaceExtraction(
                face_detected=False,
                is_valid=False,
                reason="No face detected. Position your face in front of the camera.",
            )
        score = detection.detection_score
        if score is not None and score < self.min_detection_score:
            return FaceExtraction(
                face_detected=True,
                is_valid=False,
                reason="Face detected with low confidence. Improve the lighting.",
                detection_score=score,
            )
        return FaceExtraction(
            face_detected=True,
            is_valid=True,
            reason="Face detected successfully",
            descriptor=detection.descriptor,
            detection_score=score,
        )

    async def verify(self, capture: str, ticket: Ticket) -> FaceVerdict:
        if ticket.face_descriptor is None:
            raise IncompatibleDescriptorError(
                f"Ticket {ticket.id} has no enrolled descriptor",
                details={"ticket_id": ticket.id},
            )

        live = await self._detect(capture)
        if not live.face_detected or live.descriptor is None:
            return FaceVerdict(
                matched=False,
                face_detected=False,
                tier=ConfidenceTier.NO_MATCH,
                reason="No face detected",
            )

        verdict = evaluate(live.descriptor, ticket.face_descriptor, self.thresholds)
        logger.debug(f"Face comparison for ticket {ticket.id}: distance={verdict.distance:.4f} tier={verdict.tier.value}")
        return verdict
