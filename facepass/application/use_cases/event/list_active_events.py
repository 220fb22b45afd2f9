# Local application imports
from ....domain.repositories.event_repository import EventRepository
from ...dto.event_dto import EventListResponse, EventResponse


class ListActiveEventsUseCase:
    """Use case for listing events open for registration"""

    def __init__(self, event_repository: EventRepository) -> None:
        self.event_repository = event_repository

    async def execute(self) -> EventListResponse:
        events = await self.event_repository.list_active()
        items = [EventResponse.from_domain(event) for event in events]
        return EventListResponse(total=len(items), items=items)
