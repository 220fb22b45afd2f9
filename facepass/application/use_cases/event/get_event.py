# Local application imports
from ....domain.exceptions import EventNotFoundError
from ....domain.repositories.event_repository import EventRepository
from ...dto.event_dto import EventResponse


class GetEventUseCase:
    """Use case for reading one event, including remaining capacity"""

    def __init__(self, event_repository: EventRepository) -> None:
        self.event_repository = event_repository

    async def execute(self, event_id: str) -> EventResponse:
        event = await self.event_repository.find_by_id(event_id)
        if event is None:
            raise EventNotFoundError(f"Event {event_id} not found", details={"event_id": event_id})
        return EventResponse.from_domain(event)
