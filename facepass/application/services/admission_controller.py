"""Per-event attendance counter with an atomic capacity guard"""

# Standard library imports
import logging

# Local application imports
from ...domain.exceptions import CapacityExceededError, EventNotFoundError
from ...domain.models.event import Event
from ...domain.repositories.event_repository import EventRepository

logger = logging.getLogger(__name__)


class AdmissionController:
    """
    Reserves and releases attendance slots.

    The check and the increment are a single conditional repository write, so
    N concurrent reservations against remaining capacity R succeed exactly
    min(N, R) times. Counts move only through these methods.
    """

    def __init__(self, event_repository: EventRepository, enforce_capacity: bool = True) -> None:
        self.event_repository = event_repository
        self.enforce_capacity = enforce_capacity

    async def on_ticket_issued(self, event_id: str) -> Event:
        """
        Reserve one slot for a ticket that is about to become ACTIVE.

        Raises:
            EventNotFoundError: If the event does not exist
            CapacityExceededError: If the event is full and enforcement is on
        """
        updated = await self.event_repository.increment_attendees(event_id, self.enforce_capacity)
        if updated is not None:
            logger.info(
                f"Reserved slot for event {event_id}: {updated.current_attendees}/{updated.max_capacity}"
            )
            return updated

        # The conditional write matched nothing: find out why
        event = await self.event_repository.find_by_id(event_id)
        if event is None:
            raise EventNotFoundError(f"Event {event_id} not found", details={"event_id": event_id})
        logger.warning(f"Event {event_id} at capacity ({event.current_attendees}/{event.max_capacity})")
        raise CapacityExceededError(
            f"Event {event_id} is at capacity",
            details={"event_id": event_id, "max_capacity": event.max_capacity},
        )

    async def release(self, event_id: str) -> None:
        """Give back a reserved slot whose activation did not happen."""
        updated = await self.event_repository.decrement_attendees(event_id)
        if updated is None:
            logger.warning(f"Release for event {event_id} found nothing to decrement")
            return
        logger.info(f"Released slot for event {event_id}: {updated.current_attendees}/{updated.max_capacity}")

    async def capacity_remaining(self, event_id: str) -> int:
        event = await self.event_repository.find_by_id(event_id)
        if event is None:
            raise EventNotFoundError(f"Event {event_id} not found", details={"event_id": event_id})
        return event.capacity_remaining
