"""
Ticket lifecycle rules.

    PENDING_PAYMENT -> PAID_PENDING_FACE -> ACTIVE -> USED
    any state except USED/EXPIRED -> EXPIRED

Only ACTIVE tickets may be presented at the gate. USED is terminal for
admission. These functions decide legality only; the repository applies each
transition as a conditional update.
"""
# Standard library imports
from typing import Dict, FrozenSet

# Local application imports
from ..exceptions import AlreadyUsedError, DescriptorInvalidError, InvalidStateTransitionError
from ..models.ticket import Ticket, TicketStatus


TRANSITIONS: Dict[TicketStatus, FrozenSet[TicketStatus]] = {
    TicketStatus.PENDING_PAYMENT: frozenset({TicketStatus.PAID_PENDING_FACE, TicketStatus.EXPIRED}),
    TicketStatus.PAID_PENDING_FACE: frozenset({TicketStatus.ACTIVE, TicketStatus.EXPIRED}),
    TicketStatus.ACTIVE: frozenset({TicketStatus.USED, TicketStatus.EXPIRED}),
    TicketStatus.USED: frozenset(),
    TicketStatus.EXPIRED: frozenset(),
}

# A holder keeps at most one ticket in these states per event
CLAIM_HOLDING_STATUSES: FrozenSet[TicketStatus] = frozenset(
    {TicketStatus.PENDING_PAYMENT, TicketStatus.PAID_PENDING_FACE, TicketStatus.ACTIVE}
)


def initial_status(is_free: bool) -> TicketStatus:
    """Free tickets skip payment and wait directly for face enrollment."""
    return TicketStatus.PAID_PENDING_FACE if is_free else TicketStatus.PENDING_PAYMENT


def can_transition(current: TicketStatus, target: TicketStatus) -> bool:
    return target in TRANSITIONS[current]


def ensure_transition(ticket: Ticket, target: TicketStatus) -> None:
    """
    Raises:
        AlreadyUsedError: If the ticket is USED (re-entry / re-use)
        InvalidStateTransitionError: For any other illegal transition
    """
    if ticket.status is TicketStatus.USED:
        raise AlreadyUsedError(
            f"Ticket {ticket.id} already used",
            details={"ticket_id": ticket.id},
        )
    if not can_transition(ticket.status, target):
        raise InvalidStateTransitionError(
            f"Ticket {ticket.id} cannot move from {ticket.status.value} to {target.value}",
            details={"ticket_id": ticket.id, "from": ticket.status.value, "to": target.value},
        )


def ensure_can_confirm_payment(ticket: Ticket) -> None:
    ensure_transition(ticket, TicketStatus.PAID_PENDING_FACE)


def ensure_can_enroll(ticket: Ticket) -> None:
    """The biometric is bound exactly once, from PAID_PENDING_FACE."""
    if ticket.has_biometric:
        raise DescriptorInvalidError(
            f"Ticket {ticket.id} already has an enrolled face",
            user_message="This ticket already has a registered face.",
            details={"ticket_id": ticket.id},
        )
    ensure_transition(ticket, TicketStatus.ACTIVE)


def ensure_can_admit(ticket: Ticket) -> None:
    """Checked before any biometric call so a used ticket never triggers a comparison."""
    ensure_transition(ticket, TicketStatus.USED)


def ensure_can_expire(ticket: Ticket) -> None:
    ensure_transition(ticket, TicketStatus.EXPIRED)
