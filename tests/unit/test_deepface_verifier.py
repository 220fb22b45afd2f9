"""
Unit tests for DeepFaceVerifier with the DeepFace model call replaced.
"""
import math
import time
from unittest.mock import MagicMock

import pytest

from facepass.domain.exceptions import IncompatibleDescriptorError, ServiceUnavailableError
from facepass.domain.models.face import ConfidenceTier, FaceDescriptor
from facepass.domain.models.ticket import TicketStatus
from facepass.domain.services.comparator import MatchThresholds
from facepass.infrastructure.biometrics.deepface_verifier import DeepFaceVerifier, l2_normalize
from tests.fakes import make_capture, make_ticket

METHOD = "deepface:Facenet:l2"


def _face(embedding, confidence=0.98, w=80, h=80):
    return {"embedding": embedding, "facial_area": {"x": 0, "y": 0, "w": w, "h": h}, "face_confidence": confidence}


def _verifier(faces=None, **kwargs) -> DeepFaceVerifier:
    verifier = DeepFaceVerifier(
        model_name="Facenet",
        detector_backend="opencv",
        thresholds=MatchThresholds(0.40, 0.50, 0.60),
        min_detection_score=0.7,
        timeout=kwargs.pop("timeout", 2.0),
    )
    verifier._represent = MagicMock(return_value=faces if faces is not None else [])
    return verifier


def _enrolled(values=(1.0, 0.0, 0.0, 0.0)):
    return make_ticket(
        status=TicketStatus.ACTIVE,
        face_descriptor=FaceDescriptor.from_sequence(l2_normalize(values), METHOD),
    )


class TestL2Normalize:
    def test_unit_length(self):
        values = l2_normalize([3.0, 4.0])
        assert values == pytest.approx([0.6, 0.8])
        assert math.isclose(sum(v * v for v in values), 1.0)

    def test_zero_vector_rejected(self):
        with pytest.raises(ValueError):
            l2_normalize([0.0, 0.0])


class TestDeepFaceExtract:
    @pytest.mark.asyncio
    async def test_descriptor_is_normalized_and_tagged(self):
        extraction = await _verifier([_face([10.0, 0.0, 0.0, 0.0])]).extract(make_capture())

        assert extraction.is_valid is True
        assert extraction.descriptor.method == METHOD
        assert extraction.descriptor.values == pytest.approx((1.0, 0.0, 0.0, 0.0))

    @pytest.mark.asyncio
    async def test_largest_face_wins(self):
        faces = [_face([0.0, 1.0, 0.0, 0.0], w=20, h=20), _face([1.0, 0.0, 0.0, 0.0], w=120, h=120)]
        extraction = await _verifier(faces).extract(make_capture())
        assert extraction.descriptor.values == pytest.approx((1.0, 0.0, 0.0, 0.0))

    @pytest.mark.asyncio
    async def test_no_face(self):
        extraction = await _verifier([]).extract(make_capture())
        assert extraction.face_detected is False
        assert extraction.is_valid is False

    @pytest.mark.asyncio
    async def test_low_detection_score_rejected(self):
        extraction = await _verifier([_face([1.0, 0.0, 0.0, 0.0], confidence=0.4)]).extract(make_capture())
        assert extraction.face_detected is True
        assert extraction.is_valid is False
        assert extraction.descriptor is None

    @pytest.mark.asyncio
    async def test_model_failure_is_service_unavailable(self):
        verifier = _verifier()
        verifier._represent.side_effect = RuntimeError("CUDA out of memory")
        with pytest.raises(ServiceUnavailableError):
            await verifier.extract(make_capture())

    @pytest.mark.asyncio
    async def test_slow_model_times_out(self):
        verifier = _verifier(timeout=0.05)
        verifier._represent.side_effect = lambda image: time.sleep(0.3) or []
        with pytest.raises(ServiceUnavailableError, match="timed out"):
            await verifier.extract(make_capture())


class TestDeepFaceVerify:
    @pytest.mark.asyncio
    async def test_same_face_high(self):
        verdict = await _verifier([_face([2.0, 0.0, 0.0, 0.0])]).verify(make_capture(), _enrolled())
        assert verdict.matched is True
        assert verdict.tier is ConfidenceTier.HIGH
        assert verdict.distance == pytest.approx(0.0)

    @pytest.mark.asyncio
    async def test_medium_distance(self):
        # Unit vectors at distance sqrt(0.2) ~ 0.447
        live = [0.9, math.sqrt(0.19), 0.0, 0.0]
        verdict = await _verifier([_face(live)]).verify(make_capture(), _enrolled())
        assert verdict.tier is ConfidenceTier.MEDIUM
        assert verdict.matched is True

    @pytest.mark.asyncio
    async def test_different_face_no_match(self):
        # Unit vectors at distance sqrt(0.4) ~ 0.632
        verdict = await _verifier([_face([0.8, 0.6, 0.0, 0.0])]).verify(make_capture(), _enrolled())
        assert verdict.matched is False
        assert verdict.tier is ConfidenceTier.NO_MATCH

    @pytest.mark.asyncio
    async def test_no_face_at_gate(self):
        verdict = await _verifier([]).verify(make_capture(), _enrolled())
        assert verdict.face_detected is False
        assert verdict.matched is False

    @pytest.mark.asyncio
    async def test_ticket_without_descriptor(self):
        ticket = make_ticket(face_descriptor=None, face_image=make_capture())
        with pytest.raises(IncompatibleDescriptorError):
            await _verifier([_face([1.0, 0.0, 0.0, 0.0])]).verify(make_capture(), ticket)

    @pytest.mark.asyncio
    async def test_descriptor_from_other_model_incompatible(self):
        ticket = make_ticket(face_descriptor=FaceDescriptor.from_sequence((1.0, 0.0, 0.0, 0.0), "deepface:ArcFace:l2"))
        with pytest.raises(IncompatibleDescriptorError):
            await _verifier([_face([1.0, 0.0, 0.0, 0.0])]).verify(make_capture(), ticket)
