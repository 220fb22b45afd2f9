"""
Unit tests for EnrollFaceUseCase: capture validation, slot reservation and activation.
"""
import asyncio
from decimal import Decimal

import pytest

from facepass.application.services.admission_controller import AdmissionController
from facepass.application.use_cases.ticket.enroll_face import EnrollFaceUseCase
from facepass.domain.exceptions import (
    AlreadyUsedError,
    CapacityExceededError,
    DescriptorInvalidError,
    InvalidStateTransitionError,
    NoFaceDetectedError,
    ServiceUnavailableError,
    TicketNotFoundError,
)
from facepass.domain.models.face import FaceExtraction
from facepass.domain.models.ticket import TicketClass, TicketHolder, TicketStatus
from tests.fakes import StubFaceVerifier, make_event, make_ticket

CAPTURE = "data:image/jpeg;base64,/9j/4AAQSkZJRg=="


def _pending(**overrides):
    fields = dict(status=TicketStatus.PAID_PENDING_FACE, face_descriptor=None)
    fields.update(overrides)
    return make_ticket(**fields)


def _use_case(ticket_repo, event_repo, verifier=None, timeout_seconds=1.0):
    return EnrollFaceUseCase(
        ticket_repo,
        verifier or StubFaceVerifier(),
        AdmissionController(event_repo),
        timeout_seconds=timeout_seconds,
    )


class TestEnrollFaceUseCase:
    @pytest.mark.asyncio
    async def test_enrollment_activates_and_counts(self, event_repo, ticket_repo):
        await event_repo.create(make_event())
        ticket_repo.put(_pending())

        result = await _use_case(ticket_repo, event_repo).execute("tkt-1", CAPTURE)

        assert result.status is TicketStatus.ACTIVE
        assert result.has_biometric is True
        stored = ticket_repo.tickets["tkt-1"]
        assert stored.face_descriptor is not None
        assert stored.face_image is None
        assert stored.enrolled_at is not None
        assert event_repo.events["evt-1"].current_attendees == 1

    @pytest.mark.asyncio
    async def test_judge_backend_keeps_reference_capture(self, event_repo, ticket_repo):
        await event_repo.create(make_event())
        ticket_repo.put(_pending())
        verifier = StubFaceVerifier(
            extraction=FaceExtraction(face_detected=True, is_valid=True, reason="ok"),
            uses_descriptors=False,
        )

        await _use_case(ticket_repo, event_repo, verifier).execute("tkt-1", CAPTURE)

        stored = ticket_repo.tickets["tkt-1"]
        assert stored.face_descriptor is None
        assert stored.face_image == CAPTURE
        assert stored.status is TicketStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_no_face_leaves_ticket_untouched(self, event_repo, ticket_repo):
        await event_repo.create(make_event())
        ticket_repo.put(_pending())
        verifier = StubFaceVerifier(
            extraction=FaceExtraction(face_detected=False, is_valid=False, reason="No face detected")
        )

        with pytest.raises(DescriptorInvalidError) as exc_info:
            await _use_case(ticket_repo, event_repo, verifier).execute("tkt-1", CAPTURE)

        assert exc_info.value.details == {"reason": "No face detected"}
        assert ticket_repo.tickets["tkt-1"].status is TicketStatus.PAID_PENDING_FACE
        assert event_repo.events["evt-1"].current_attendees == 0

    @pytest.mark.asyncio
    async def test_unreadable_capture_is_descriptor_invalid(self, event_repo, ticket_repo):
        await event_repo.create(make_event())
        ticket_repo.put(_pending())
        verifier = StubFaceVerifier(error=NoFaceDetectedError("Capture is not a readable image"))

        with pytest.raises(DescriptorInvalidError):
            await _use_case(ticket_repo, event_repo, verifier).execute("tkt-1", "not-an-image")

        assert ticket_repo.tickets["tkt-1"].status is TicketStatus.PAID_PENDING_FACE
        assert event_repo.events["evt-1"].current_attendees == 0

    @pytest.mark.asyncio
    async def test_low_quality_capture_rejected(self, event_repo, ticket_repo):
        await event_repo.create(make_event())
        ticket_repo.put(_pending())
        verifier = StubFaceVerifier(
            extraction=FaceExtraction(face_detected=True, is_valid=False, reason="Face too small", detection_score=0.3)
        )

        with pytest.raises(DescriptorInvalidError):
            await _use_case(ticket_repo, event_repo, verifier).execute("tkt-1", CAPTURE)
        assert event_repo.events["evt-1"].current_attendees == 0

    @pytest.mark.asyncio
    async def test_extraction_timeout_is_service_unavailable(self, event_repo, ticket_repo):
        await event_repo.create(make_event())
        ticket_repo.put(_pending())
        verifier = StubFaceVerifier(delay=0.5)

        with pytest.raises(ServiceUnavailableError):
            await _use_case(ticket_repo, event_repo, verifier, timeout_seconds=0.05).execute("tkt-1", CAPTURE)
        assert ticket_repo.tickets["tkt-1"].status is TicketStatus.PAID_PENDING_FACE

    @pytest.mark.asyncio
    async def test_second_enrollment_rejected(self, event_repo, ticket_repo):
        await event_repo.create(make_event(current_attendees=1))
        ticket_repo.put(make_ticket())
        verifier = StubFaceVerifier()

        with pytest.raises(DescriptorInvalidError):
            await _use_case(ticket_repo, event_repo, verifier).execute("tkt-1", CAPTURE)
        assert verifier.extract_calls == 0
        assert event_repo.events["evt-1"].current_attendees == 1

    @pytest.mark.asyncio
    async def test_unpaid_ticket_cannot_enroll(self, event_repo, ticket_repo):
        await event_repo.create(make_event())
        ticket_repo.put(_pending(status=TicketStatus.PENDING_PAYMENT))

        with pytest.raises(InvalidStateTransitionError):
            await _use_case(ticket_repo, event_repo).execute("tkt-1", CAPTURE)

    @pytest.mark.asyncio
    async def test_unknown_ticket(self, event_repo, ticket_repo):
        with pytest.raises(TicketNotFoundError):
            await _use_case(ticket_repo, event_repo).execute("missing", CAPTURE)

    @pytest.mark.asyncio
    async def test_full_event_rejects_enrollment(self, event_repo, ticket_repo):
        await event_repo.create(make_event(max_capacity=1, current_attendees=1))
        ticket_repo.put(_pending())

        with pytest.raises(CapacityExceededError) as exc_info:
            await _use_case(ticket_repo, event_repo).execute("tkt-1", CAPTURE)

        assert exc_info.value.recoverable is False
        assert ticket_repo.tickets["tkt-1"].status is TicketStatus.PAID_PENDING_FACE
        assert event_repo.events["evt-1"].current_attendees == 1

    @pytest.mark.asyncio
    async def test_concurrent_enrollments_never_exceed_capacity(self, event_repo, ticket_repo):
        await event_repo.create(make_event(is_free=True, price=Decimal("0"), max_capacity=3))
        for i in range(8):
            ticket_repo.put(
                _pending(
                    id=f"tkt-{i}",
                    holder=TicketHolder(name=f"Guest {i}", email=f"guest{i}@example.com", national_id=str(i)),
                    ticket_class=TicketClass.FREE,
                    price=Decimal("0"),
                )
            )
        use_case = _use_case(ticket_repo, event_repo)

        results = await asyncio.gather(
            *(use_case.execute(f"tkt-{i}", CAPTURE) for i in range(8)),
            return_exceptions=True,
        )

        granted = [r for r in results if not isinstance(r, Exception)]
        refused = [r for r in results if isinstance(r, CapacityExceededError)]
        assert len(granted) == 3
        assert len(refused) == 5
        assert event_repo.events["evt-1"].current_attendees == 3
        active = [t for t in ticket_repo.tickets.values() if t.status is TicketStatus.ACTIVE]
        assert len(active) == 3

    @pytest.mark.asyncio
    async def test_lost_activation_race_releases_slot(self, event_repo, ticket_repo):
        await event_repo.create(make_event())
        ticket_repo.put(_pending())
        use_case = _use_case(ticket_repo, event_repo)

        original_bind = ticket_repo.bind_face

        async def bind_after_expiry(ticket_id, descriptor, face_image):
            # Ticket is expired by a manager between validation and activation
            await ticket_repo.transition_status(ticket_id, TicketStatus.PAID_PENDING_FACE, TicketStatus.EXPIRED)
            return await original_bind(ticket_id, descriptor, face_image)

        ticket_repo.bind_face = bind_after_expiry

        with pytest.raises(InvalidStateTransitionError):
            await use_case.execute("tkt-1", CAPTURE)
        assert event_repo.events["evt-1"].current_attendees == 0
        assert ticket_repo.tickets["tkt-1"].status is TicketStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_repository_failure_releases_slot(self, event_repo, ticket_repo):
        await event_repo.create(make_event())
        ticket_repo.put(_pending())

        async def broken_bind(ticket_id, descriptor, face_image):
            raise RuntimeError("Error binding face: connection reset")

        ticket_repo.bind_face = broken_bind

        with pytest.raises(RuntimeError):
            await _use_case(ticket_repo, event_repo).execute("tkt-1", CAPTURE)
        assert event_repo.events["evt-1"].current_attendees == 0

    @pytest.mark.asyncio
    async def test_used_ticket_reports_already_used(self, event_repo, ticket_repo):
        await event_repo.create(make_event())
        ticket_repo.put(_pending(status=TicketStatus.USED))

        with pytest.raises(AlreadyUsedError):
            await _use_case(ticket_repo, event_repo).execute("tkt-1", CAPTURE)

    @pytest.mark.asyncio
    async def test_cancelled_activation_releases_slot(self, event_repo, ticket_repo):
        await event_repo.create(make_event())
        ticket_repo.put(_pending())

        async def cancelled_bind(ticket_id, descriptor, face_image):
            raise asyncio.CancelledError()

        ticket_repo.bind_face = cancelled_bind

        with pytest.raises(asyncio.CancelledError):
            await _use_case(ticket_repo, event_repo).execute("tkt-1", CAPTURE)
        assert event_repo.events["evt-1"].current_attendees == 0
        assert ticket_repo.tickets["tkt-1"].status is TicketStatus.PAID_PENDING_FACE
