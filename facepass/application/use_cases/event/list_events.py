# Local application imports
from ....domain.repositories.event_repository import EventRepository
from ....domain.models.session import OperatorSession
from ....domain.models.user import UserRole
from ....utils.datetime_utils import utc_now
from ...dto.event_dto import EventListResponse, EventResponse


class ListEventsUseCase:
    """Use case for listing every event, including inactive ones (MANAGER and above)"""

    def __init__(self, event_repository: EventRepository) -> None:
        self.event_repository = event_repository

    async def execute(self, operator: OperatorSession) -> EventListResponse:
        operator.require(UserRole.MANAGER, utc_now())
        events = await self.event_repository.list_all()
        items = [EventResponse.from_domain(event) for event in events]
        return EventListResponse(total=len(items), items=items)
