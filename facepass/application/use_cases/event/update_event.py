# Standard library imports
import logging
from dataclasses import replace

# Local application imports
from ....domain.constants import EventFields
from ....domain.exceptions import EventNotFoundError
from ....domain.repositories.event_repository import EventRepository
from ....domain.models.event import Event
from ....domain.models.session import OperatorSession
from ....domain.models.user import UserRole
from ....utils.datetime_utils import ensure_utc, utc_now
from ...dto.event_dto import EventResponse, EventUpdateRequest

logger = logging.getLogger(__name__)


class UpdateEventUseCase:
    """Use case for editing an event (MANAGER and above)"""

    def __init__(self, event_repository: EventRepository) -> None:
        self.event_repository = event_repository

    async def execute(self, event_id: str, request: EventUpdateRequest, operator: OperatorSession) -> EventResponse:
        """
        Apply the fields present in ``request``

        Raises:
            PermissionDeniedError / SessionExpiredError: If the operator may not manage events
            EventNotFoundError: If the event does not exist
            ValueError: If the result violates event rules or max_capacity
                would drop below the attendees already admitted
        """
        operator.require(UserRole.MANAGER, utc_now())

        event = await self._load(event_id)
        changes = request.model_dump(exclude_none=True)
        if not changes:
            return EventResponse.from_domain(event)

        if EventFields.NAME in changes:
            changes[EventFields.NAME] = changes[EventFields.NAME].strip()
        if EventFields.STARTS_AT in changes:
            changes[EventFields.STARTS_AT] = ensure_utc(changes[EventFields.STARTS_AT])

        # Runs the model validations against the merged result
        replace(event, **changes)
        self._check_capacity(changes, event.current_attendees)

        updated = await self.event_repository.update(event_id, changes)
        if updated is None:
            # Deleted or filled past the new capacity since the read above
            current = await self._load(event_id)
            self._check_capacity(changes, current.current_attendees)
            raise ValueError(f"Event {event_id} changed during the update, retry")

        logger.info(f"Event {event_id} updated by {operator.user_id}: {sorted(changes)}")
        return EventResponse.from_domain(updated)

    async def _load(self, event_id: str) -> Event:
        event = await self.event_repository.find_by_id(event_id)
        if event is None:
            raise EventNotFoundError(f"Event {event_id} not found", details={"event_id": event_id})
        return event

    @staticmethod
    def _check_capacity(changes: dict, current_attendees: int) -> None:
        new_capacity = changes.get(EventFields.MAX_CAPACITY)
        if new_capacity is not None and new_capacity < current_attendees:
            raise ValueError(
                f"Capacity {new_capacity} is below the {current_attendees} attendees already admitted"
            )
