"""
Unit tests for facepass.domain.services.ticket_lifecycle
"""
import pytest

from facepass.domain.exceptions import (
    AlreadyUsedError,
    DescriptorInvalidError,
    InvalidStateTransitionError,
)
from facepass.domain.models.ticket import TicketStatus
from facepass.domain.services import ticket_lifecycle
from tests.fakes import make_ticket


class TestInitialStatus:
    def test_free_event_skips_payment(self):
        assert ticket_lifecycle.initial_status(is_free=True) is TicketStatus.PAID_PENDING_FACE

    def test_paid_event_awaits_payment(self):
        assert ticket_lifecycle.initial_status(is_free=False) is TicketStatus.PENDING_PAYMENT


class TestTransitionGraph:
    @pytest.mark.parametrize(
        "current,target",
        [
            (TicketStatus.PENDING_PAYMENT, TicketStatus.PAID_PENDING_FACE),
            (TicketStatus.PAID_PENDING_FACE, TicketStatus.ACTIVE),
            (TicketStatus.ACTIVE, TicketStatus.USED),
            (TicketStatus.PENDING_PAYMENT, TicketStatus.EXPIRED),
            (TicketStatus.PAID_PENDING_FACE, TicketStatus.EXPIRED),
            (TicketStatus.ACTIVE, TicketStatus.EXPIRED),
        ],
    )
    def test_allowed(self, current, target):
        assert ticket_lifecycle.can_transition(current, target) is True

    @pytest.mark.parametrize(
        "current,target",
        [
            (TicketStatus.PENDING_PAYMENT, TicketStatus.ACTIVE),
            (TicketStatus.PENDING_PAYMENT, TicketStatus.USED),
            (TicketStatus.PAID_PENDING_FACE, TicketStatus.USED),
            (TicketStatus.USED, TicketStatus.ACTIVE),
            (TicketStatus.USED, TicketStatus.EXPIRED),
            (TicketStatus.EXPIRED, TicketStatus.ACTIVE),
            (TicketStatus.ACTIVE, TicketStatus.PAID_PENDING_FACE),
        ],
    )
    def test_forbidden(self, current, target):
        assert ticket_lifecycle.can_transition(current, target) is False

    def test_terminal_states_have_no_exits(self):
        for status in TicketStatus:
            assert not ticket_lifecycle.can_transition(TicketStatus.USED, status)
            assert not ticket_lifecycle.can_transition(TicketStatus.EXPIRED, status)


class TestGuards:
    def test_admit_used_ticket_raises_already_used(self):
        ticket = make_ticket(status=TicketStatus.USED)
        with pytest.raises(AlreadyUsedError):
            ticket_lifecycle.ensure_can_admit(ticket)

    def test_admit_pending_ticket_raises_invalid_transition(self):
        ticket = make_ticket(status=TicketStatus.PAID_PENDING_FACE, face_descriptor=None)
        with pytest.raises(InvalidStateTransitionError):
            ticket_lifecycle.ensure_can_admit(ticket)

    def test_admit_active_ticket_passes(self):
        ticket_lifecycle.ensure_can_admit(make_ticket(status=TicketStatus.ACTIVE))

    def test_enroll_twice_raises_descriptor_invalid(self):
        ticket = make_ticket(status=TicketStatus.PAID_PENDING_FACE)
        with pytest.raises(DescriptorInvalidError):
            ticket_lifecycle.ensure_can_enroll(ticket)

    def test_enroll_before_payment_raises(self):
        ticket = make_ticket(status=TicketStatus.PENDING_PAYMENT, face_descriptor=None)
        with pytest.raises(InvalidStateTransitionError):
            ticket_lifecycle.ensure_can_enroll(ticket)

    def test_expire_used_ticket_raises_already_used(self):
        with pytest.raises(AlreadyUsedError):
            ticket_lifecycle.ensure_can_expire(make_ticket(status=TicketStatus.USED))

    def test_expire_expired_ticket_raises(self):
        with pytest.raises(InvalidStateTransitionError):
            ticket_lifecycle.ensure_can_expire(make_ticket(status=TicketStatus.EXPIRED))
