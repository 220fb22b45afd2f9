# Standard library imports
import logging
from decimal import Decimal
from typing import Optional

# Local application imports
from ....domain.constants import DEFAULT_TICKET_PRICES
from ....domain.exceptions import (
    CapacityExceededError,
    DuplicateClaimError,
    EventInactiveError,
    EventNotFoundError,
    InvalidTicketClassError,
)
from ....domain.models.event import Event
from ....domain.models.ticket import Ticket, TicketClass, TicketHolder
from ....domain.repositories.event_repository import EventRepository
from ....domain.repositories.ticket_repository import TicketRepository
from ....domain.services import ticket_lifecycle
from ....utils.datetime_utils import utc_now
from ...dto.ticket_dto import TicketIssueRequest, TicketResponse

logger = logging.getLogger(__name__)


def resolve_price(event: Event, ticket_class: TicketClass) -> Decimal:
    """
    Price a ticket class for an event.

    Free events only issue FREE tickets. Paid events sell STANDARD at the
    event's own price and the upgraded classes at list price.

    Raises:
        InvalidTicketClassError: If the class is not sold for this event
    """
    if event.is_free:
        if ticket_class is not TicketClass.FREE:
            raise InvalidTicketClassError(
                f"Event {event.id} is free; class {ticket_class.value} not available",
                details={"event_id": event.id, "ticket_class": ticket_class.value},
            )
        return Decimal("0")

    if ticket_class is TicketClass.FREE:
        raise InvalidTicketClassError(
            f"Event {event.id} is paid; FREE tickets not available",
            details={"event_id": event.id, "ticket_class": ticket_class.value},
        )
    if ticket_class is TicketClass.STANDARD:
        return event.price
    return DEFAULT_TICKET_PRICES[ticket_class]


class IssueTicketUseCase:
    """Use case for registering a holder for an event"""

    def __init__(
        self,
        ticket_repository: TicketRepository,
        event_repository: EventRepository,
        enforce_capacity: bool = True,
    ) -> None:
        self.ticket_repository = ticket_repository
        self.event_repository = event_repository
        self.enforce_capacity = enforce_capacity

    async def execute(self, request: TicketIssueRequest) -> TicketResponse:
        """
        Issue a ticket in its initial lifecycle state

        Raises:
            EventNotFoundError, EventInactiveError: If the event cannot take registrations
            InvalidTicketClassError: If the class is not sold for this event
            DuplicateClaimError: If the email already holds a live ticket for the event
            CapacityExceededError: If the event is already full (strict mode)
        """
        event = await self.event_repository.find_by_id(request.event_id)
        if event is None:
            raise EventNotFoundError(f"Event {request.event_id} not found", details={"event_id": request.event_id})
        if not event.is_active:
            raise EventInactiveError(f"Event {event.id} is not active", details={"event_id": event.id})

        # Seats are reserved at enrollment; this only refuses obviously full events early
        if self.enforce_capacity and event.capacity_remaining == 0:
            raise CapacityExceededError(
                f"Event {event.id} is at capacity",
                details={"event_id": event.id, "max_capacity": event.max_capacity},
            )

        ticket_class: Optional[TicketClass] = request.ticket_class
        if ticket_class is None:
            ticket_class = TicketClass.FREE if event.is_free else TicketClass.STANDARD
        price = resolve_price(event, ticket_class)

        holder = TicketHolder(name=request.holder_name.strip(), email=request.email, national_id=request.national_id.strip())

        existing = await self.ticket_repository.find_unused_by_claim(event.id or "", holder.email)
        if any(t.status in ticket_lifecycle.CLAIM_HOLDING_STATUSES for t in existing):
            raise DuplicateClaimError(
                f"{holder.email} already holds a ticket for event {event.id}",
                details={"event_id": event.id},
            )

        now = utc_now()
        ticket = Ticket(
            id=None,
            event_id=event.id or "",
            holder=holder,
            ticket_class=ticket_class,
            price=price,
            status=ticket_lifecycle.initial_status(event.is_free),
            purchased_at=now,
            updated_at=now,
        )
        # Two submissions racing past the check above are settled by the repository
        created = await self.ticket_repository.create(ticket)
        logger.info(
            f"Ticket {created.id} issued for event {created.event_id} "
            f"({created.ticket_class.value}, {created.status.value})"
        )
        return TicketResponse.from_domain(created)
