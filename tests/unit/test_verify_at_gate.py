"""
Unit tests for the gate orchestrator: fail-closed denials and exactly-once admission.
"""
import asyncio

import pytest

from facepass.application.use_cases.gate.verify_at_gate import VerifyAtGateUseCase, select_claim
from facepass.domain.exceptions import (
    ClaimNotFoundError,
    ErrorKind,
    FaceMismatchError,
    PermissionDeniedError,
    ServiceUnavailableError,
    SessionExpiredError,
)
from facepass.domain.models.face import ConfidenceTier, FaceVerdict
from facepass.domain.models.ticket import TicketStatus
from facepass.domain.models.user import UserRole
from tests.fakes import StubFaceVerifier, make_session, make_ticket

CAPTURE = "data:image/jpeg;base64,/9j/4AAQSkZJRg=="


@pytest.fixture
def verifier():
    return StubFaceVerifier()


@pytest.fixture
def gate(ticket_repo, verifier):
    return VerifyAtGateUseCase(ticket_repo, verifier, timeout_seconds=0.5)


class TestSelectClaim:
    def test_single_live_ticket(self):
        ticket = make_ticket()
        assert select_claim([ticket]) is ticket

    def test_live_ticket_preferred_over_expired(self):
        live = make_ticket(id="tkt-live")
        expired = make_ticket(id="tkt-old", status=TicketStatus.EXPIRED)
        assert select_claim([expired, live]) is live

    def test_only_expired_tickets(self):
        expired = make_ticket(status=TicketStatus.EXPIRED)
        assert select_claim([expired]) is expired

    def test_ambiguous_claim_resolves_to_nothing(self):
        assert select_claim([make_ticket(id="a"), make_ticket(id="b")]) is None

    def test_empty(self):
        assert select_claim([]) is None


class TestVerifyAtGateUseCase:
    @pytest.mark.asyncio
    async def test_grant_marks_ticket_used(self, gate, ticket_repo, operator_session):
        ticket_repo.put(make_ticket())

        result = await gate.execute("evt-1", "X@Y.com", CAPTURE, operator_session)

        assert result.granted is True
        assert result.kind is None
        assert result.tier is ConfidenceTier.HIGH
        assert result.distance == pytest.approx(0.35)
        assert result.audit == "GRANTED confidence=High"
        stored = ticket_repo.tickets["tkt-1"]
        assert stored.status is TicketStatus.USED
        assert stored.used_at is not None

    @pytest.mark.asyncio
    async def test_low_tier_still_admits(self, ticket_repo, operator_session):
        ticket_repo.put(make_ticket())
        verifier = StubFaceVerifier(
            verdict=FaceVerdict(matched=True, face_detected=True, tier=ConfidenceTier.LOW, distance=0.55)
        )

        result = await VerifyAtGateUseCase(ticket_repo, verifier).execute("evt-1", "x@y.com", CAPTURE, operator_session)
        assert result.granted is True
        assert result.tier is ConfidenceTier.LOW

    @pytest.mark.asyncio
    async def test_unknown_claim_skips_biometrics(self, gate, verifier, operator_session):
        result = await gate.execute("evt-1", "nobody@example.com", CAPTURE, operator_session)

        assert result.granted is False
        assert result.kind is ErrorKind.CLAIM_NOT_FOUND
        assert result.message == ClaimNotFoundError.default_user_message
        assert verifier.verify_calls == 0

    @pytest.mark.asyncio
    async def test_claim_for_other_event_not_found(self, gate, ticket_repo, verifier, operator_session):
        ticket_repo.put(make_ticket())
        result = await gate.execute("evt-2", "x@y.com", CAPTURE, operator_session)
        assert result.kind is ErrorKind.CLAIM_NOT_FOUND
        assert verifier.verify_calls == 0

    @pytest.mark.asyncio
    async def test_pending_ticket_denied_without_biometrics(self, gate, ticket_repo, verifier, operator_session):
        ticket_repo.put(make_ticket(status=TicketStatus.PAID_PENDING_FACE, face_descriptor=None))

        result = await gate.execute("evt-1", "x@y.com", CAPTURE, operator_session)

        assert result.granted is False
        assert result.kind is ErrorKind.INVALID_TRANSITION
        assert verifier.verify_calls == 0

    @pytest.mark.asyncio
    async def test_mismatch_leaves_ticket_active(self, ticket_repo, operator_session):
        ticket_repo.put(make_ticket())
        verifier = StubFaceVerifier(
            verdict=FaceVerdict(matched=False, face_detected=True, tier=ConfidenceTier.NO_MATCH, distance=0.72)
        )

        result = await VerifyAtGateUseCase(ticket_repo, verifier).execute("evt-1", "x@y.com", CAPTURE, operator_session)

        assert result.granted is False
        assert result.kind is ErrorKind.FACE_MISMATCH
        assert result.message == FaceMismatchError.default_user_message
        assert result.audit == "DENIED:FaceMismatch confidence=No Match"
        assert ticket_repo.tickets["tkt-1"].status is TicketStatus.ACTIVE
        assert ticket_repo.transition_calls == 0

    @pytest.mark.asyncio
    async def test_no_face_detected(self, ticket_repo, operator_session):
        ticket_repo.put(make_ticket())
        verifier = StubFaceVerifier(
            verdict=FaceVerdict(matched=False, face_detected=False, tier=ConfidenceTier.NO_MATCH)
        )

        result = await VerifyAtGateUseCase(ticket_repo, verifier).execute("evt-1", "x@y.com", CAPTURE, operator_session)
        assert result.kind is ErrorKind.NO_FACE_DETECTED
        assert ticket_repo.tickets["tkt-1"].status is TicketStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_timeout_denies(self, ticket_repo, operator_session):
        ticket_repo.put(make_ticket())
        verifier = StubFaceVerifier(delay=0.5)

        result = await VerifyAtGateUseCase(ticket_repo, verifier, timeout_seconds=0.05).execute(
            "evt-1", "x@y.com", CAPTURE, operator_session
        )

        assert result.granted is False
        assert result.kind is ErrorKind.SERVICE_UNAVAILABLE
        assert ticket_repo.tickets["tkt-1"].status is TicketStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_backend_error_denies(self, ticket_repo, operator_session):
        ticket_repo.put(make_ticket())
        verifier = StubFaceVerifier(error=ServiceUnavailableError("Groq API returned 500"))

        result = await VerifyAtGateUseCase(ticket_repo, verifier).execute("evt-1", "x@y.com", CAPTURE, operator_session)
        assert result.kind is ErrorKind.SERVICE_UNAVAILABLE
        assert ticket_repo.tickets["tkt-1"].status is TicketStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_unexpected_error_fails_closed(self, ticket_repo, operator_session):
        ticket_repo.put(make_ticket())
        verifier = StubFaceVerifier(error=RuntimeError("segfault in detector"))

        result = await VerifyAtGateUseCase(ticket_repo, verifier).execute("evt-1", "x@y.com", CAPTURE, operator_session)
        assert result.granted is False
        assert result.kind is ErrorKind.SERVICE_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_reentry_is_denied(self, gate, ticket_repo, verifier, operator_session):
        ticket_repo.put(make_ticket())

        first = await gate.execute("evt-1", "x@y.com", CAPTURE, operator_session)
        second = await gate.execute("evt-1", "x@y.com", CAPTURE, operator_session)

        assert first.granted is True
        assert second.granted is False
        assert verifier.verify_calls == 1

    @pytest.mark.asyncio
    async def test_concurrent_attempts_admit_exactly_once(self, gate, ticket_repo, operator_session):
        ticket_repo.put(make_ticket())

        results = await asyncio.gather(
            gate.execute("evt-1", "x@y.com", CAPTURE, operator_session),
            gate.execute("evt-1", "x@y.com", CAPTURE, operator_session),
        )

        granted = [r for r in results if r.granted]
        denied = [r for r in results if not r.granted]
        assert len(granted) == 1
        assert len(denied) == 1
        assert denied[0].kind is ErrorKind.ALREADY_USED
        assert ticket_repo.tickets["tkt-1"].status is TicketStatus.USED

    @pytest.mark.asyncio
    async def test_requires_operator_role(self, gate, ticket_repo, verifier):
        ticket_repo.put(make_ticket())
        with pytest.raises(PermissionDeniedError):
            await gate.execute("evt-1", "x@y.com", CAPTURE, make_session(UserRole.USER))
        assert verifier.verify_calls == 0

    @pytest.mark.asyncio
    async def test_expired_session_rejected(self, gate, ticket_repo):
        ticket_repo.put(make_ticket())
        with pytest.raises(SessionExpiredError):
            await gate.execute("evt-1", "x@y.com", CAPTURE, make_session(UserRole.ADMIN, expired=True))
        assert ticket_repo.tickets["tkt-1"].status is TicketStatus.ACTIVE
