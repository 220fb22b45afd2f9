"""
Unit tests for facepass.domain.models
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from facepass.domain.exceptions import (
    AlreadyUsedError,
    CapacityExceededError,
    ErrorKind,
    PermissionDeniedError,
    ServiceUnavailableError,
    SessionExpiredError,
)
from facepass.domain.models.face import ConfidenceTier, FaceDescriptor, FaceVerdict
from facepass.domain.models.ticket import TicketClass, TicketHolder
from facepass.domain.models.user import UserRole, has_permission
from facepass.domain.models.verification import VerificationResult
from tests.fakes import make_event, make_session, make_ticket


class TestUserRole:
    def test_rank_order(self):
        ranks = [UserRole.USER, UserRole.OPERATOR, UserRole.MANAGER, UserRole.ADMIN]
        assert [r.rank for r in ranks] == [1, 2, 3, 4]

    def test_higher_rank_implies_lower_permissions(self):
        assert has_permission(UserRole.ADMIN, UserRole.OPERATOR) is True
        assert has_permission(UserRole.MANAGER, UserRole.MANAGER) is True
        assert has_permission(UserRole.OPERATOR, UserRole.MANAGER) is False
        assert has_permission(UserRole.USER, UserRole.OPERATOR) is False


class TestOperatorSession:
    def test_require_passes_for_sufficient_role(self):
        make_session(UserRole.MANAGER).require(UserRole.OPERATOR, datetime.now(timezone.utc))

    def test_require_rejects_lower_role(self):
        with pytest.raises(PermissionDeniedError):
            make_session(UserRole.OPERATOR).require(UserRole.MANAGER, datetime.now(timezone.utc))

    def test_require_rejects_expired_session(self):
        session = make_session(UserRole.ADMIN, expired=True)
        assert session.is_expired(datetime.now(timezone.utc))
        with pytest.raises(SessionExpiredError):
            session.require(UserRole.USER, datetime.now(timezone.utc))


class TestConfidenceTier:
    def test_parse_is_case_insensitive(self):
        assert ConfidenceTier.parse("high") is ConfidenceTier.HIGH
        assert ConfidenceTier.parse(" Medium ") is ConfidenceTier.MEDIUM
        assert ConfidenceTier.parse("no_match") is ConfidenceTier.NO_MATCH

    def test_parse_unknown_returns_none(self):
        assert ConfidenceTier.parse("certain") is None
        assert ConfidenceTier.parse(None) is None
        assert ConfidenceTier.parse(3) is None

    def test_only_no_match_is_not_a_match(self):
        assert [t.is_match for t in ConfidenceTier] == [True, True, True, False]


class TestFaceDescriptor:
    def test_rejects_empty_and_non_finite(self):
        with pytest.raises(ValueError):
            FaceDescriptor.from_sequence([], "m")
        with pytest.raises(ValueError):
            FaceDescriptor.from_sequence([0.1, float("nan")], "m")

    def test_repr_hides_values(self):
        text = repr(FaceDescriptor.from_sequence([0.123456, 0.654321], "m"))
        assert "0.123456" not in text
        assert "length=2" in text


class TestFaceVerdict:
    def test_match_requires_match_tier(self):
        with pytest.raises(ValueError):
            FaceVerdict(matched=True, face_detected=True, tier=ConfidenceTier.NO_MATCH)

    def test_match_requires_detected_face(self):
        with pytest.raises(ValueError):
            FaceVerdict(matched=True, face_detected=False, tier=ConfidenceTier.HIGH)


class TestTicketAndEvent:
    def test_holder_email_normalized(self):
        holder = TicketHolder(name="Alex", email="  X@Y.COM ", national_id="1")
        assert holder.email == "x@y.com"

    def test_free_ticket_must_be_zero_priced(self):
        with pytest.raises(ValueError):
            make_ticket(ticket_class=TicketClass.FREE, price=Decimal("10"))

    def test_capacity_remaining_never_negative(self):
        event = make_event(max_capacity=5, current_attendees=7)
        assert event.capacity_remaining == 0

    def test_free_event_must_be_zero_priced(self):
        with pytest.raises(ValueError):
            make_event(is_free=True, price=Decimal("5"))


class TestErrorsAndResults:
    def test_definitive_kinds_not_recoverable(self):
        assert AlreadyUsedError("x").recoverable is False
        assert CapacityExceededError("x").recoverable is False
        assert ServiceUnavailableError("x").recoverable is True

    def test_audit_string(self):
        granted = VerificationResult(granted=True, message="ok", tier=ConfidenceTier.HIGH)
        denied = VerificationResult(granted=False, message="no", kind=ErrorKind.FACE_MISMATCH,
                                    tier=ConfidenceTier.NO_MATCH)
        assert granted.audit == "GRANTED confidence=High"
        assert denied.audit == "DENIED:FaceMismatch confidence=No Match"
