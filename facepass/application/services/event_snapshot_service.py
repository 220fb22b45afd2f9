"""Builds and publishes full per-event snapshots (event counters plus ticket roster)"""

# Standard library imports
import itertools
import logging
from typing import Any, Dict, Optional

# Local application imports
from ...domain.models.event import Event
from ...domain.models.ticket import Ticket
from ...domain.repositories.event_repository import EventRepository
from ...domain.repositories.ticket_repository import TicketRepository
from ...infrastructure.notifications.snapshot_feed import SnapshotFeed
from ...utils.datetime_utils import to_iso, utc_now

logger = logging.getLogger(__name__)

SNAPSHOT_MESSAGE_TYPE = "event_snapshot"


def _ticket_summary(ticket: Ticket) -> Dict[str, Any]:
    # Biometric payloads never leave the repository through the feed
    return {
        "id": ticket.id,
        "holder_name": ticket.holder.name,
        "holder_email": ticket.holder.email,
        "ticket_class": ticket.ticket_class.value,
        "status": ticket.status.value,
        "has_biometric": ticket.has_biometric,
        "purchased_at": to_iso(ticket.purchased_at),
        "enrolled_at": to_iso(ticket.enrolled_at),
        "used_at": to_iso(ticket.used_at),
    }


def build_snapshot(event: Event, tickets, sequence: int = 0) -> Dict[str, Any]:
    """
    Assemble the complete snapshot message for one event.

    ``sequence`` orders snapshots by the moment their reads started; a higher
    value never reflects older state.
    """
    return {
        "type": SNAPSHOT_MESSAGE_TYPE,
        "event_id": event.id,
        "sequence": sequence,
        "event": {
            "id": event.id,
            "name": event.name,
            "location": event.location,
            "starts_at": to_iso(event.starts_at),
            "is_active": event.is_active,
            "max_capacity": event.max_capacity,
            "current_attendees": event.current_attendees,
            "capacity_remaining": event.capacity_remaining,
        },
        "tickets": [_ticket_summary(ticket) for ticket in tickets],
        "generated_at": to_iso(utc_now()),
    }


class EventSnapshotService:
    """Reads the current state of an event and pushes it to the snapshot feed"""

    def __init__(
        self,
        event_repository: EventRepository,
        ticket_repository: TicketRepository,
        feed: SnapshotFeed,
    ) -> None:
        self.event_repository = event_repository
        self.ticket_repository = ticket_repository
        self.feed = feed
        self._sequence = itertools.count(1)

    async def build(self, event_id: str) -> Optional[Dict[str, Any]]:
        # Taken before the reads, so a later sequence never saw older data
        sequence = next(self._sequence)
        event = await self.event_repository.find_by_id(event_id)
        if event is None:
            return None
        tickets = await self.ticket_repository.list_by_event(event_id)
        return build_snapshot(event, tickets, sequence)

    async def publish(self, event_id: str) -> int:
        """
        Rebuild the event's snapshot and deliver it to subscribers.

        Returns:
            Number of subscribers reached (0 when nobody listens or the event is gone)
        """
        if not self.feed.has_subscribers(event_id):
            return 0
        snapshot = await self.build(event_id)
        if snapshot is None:
            logger.warning(f"Snapshot requested for unknown event {event_id}")
            return 0
        return await self.feed.publish(event_id, snapshot)
