# Standard library imports
import logging

# Local application imports
from ....domain.repositories.event_repository import EventRepository
from ....domain.models.event import Event
from ....domain.models.session import OperatorSession
from ....domain.models.user import UserRole
from ....utils.datetime_utils import ensure_utc, utc_now
from ...dto.event_dto import EventCreateRequest, EventResponse

logger = logging.getLogger(__name__)


class CreateEventUseCase:
    """Use case for creating an event (MANAGER and above)"""

    def __init__(self, event_repository: EventRepository) -> None:
        self.event_repository = event_repository

    async def execute(self, request: EventCreateRequest, operator: OperatorSession) -> EventResponse:
        """
        Raises:
            PermissionDeniedError / SessionExpiredError: If the operator may not manage events
            ValueError: If the event data violates business rules
        """
        operator.require(UserRole.MANAGER, utc_now())

        event = Event(
            id=None,
            name=request.name.strip(),
            description=request.description,
            location=request.location,
            starts_at=ensure_utc(request.starts_at),
            max_capacity=request.max_capacity,
            current_attendees=0,
            is_active=request.is_active,
            is_free=request.is_free,
            price=request.price,
            image_url=request.image_url,
        )
        created = await self.event_repository.create(event)
        logger.info(f"Event {created.id} created by {operator.user_id} (capacity {created.max_capacity})")
        return EventResponse.from_domain(created)
