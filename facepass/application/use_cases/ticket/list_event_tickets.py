# Local application imports
from ....domain.exceptions import EventNotFoundError
from ....domain.models.session import OperatorSession
from ....domain.models.user import UserRole
from ....domain.repositories.event_repository import EventRepository
from ....domain.repositories.ticket_repository import TicketRepository
from ....utils.datetime_utils import utc_now
from ...dto.ticket_dto import TicketListResponse, TicketResponse


class ListEventTicketsUseCase:
    """Use case for listing an event's tickets (OPERATOR and above)"""

    def __init__(self, ticket_repository: TicketRepository, event_repository: EventRepository) -> None:
        self.ticket_repository = ticket_repository
        self.event_repository = event_repository

    async def execute(self, event_id: str, operator: OperatorSession) -> TicketListResponse:
        operator.require(UserRole.OPERATOR, utc_now())

        event = await self.event_repository.find_by_id(event_id)
        if event is None:
            raise EventNotFoundError(f"Event {event_id} not found", details={"event_id": event_id})

        tickets = await self.ticket_repository.list_by_event(event_id)
        items = [TicketResponse.from_domain(ticket) for ticket in tickets]
        return TicketListResponse(total=len(items), items=items)
