# Local application imports
from ....domain.exceptions import TicketNotFoundError
from ....domain.repositories.ticket_repository import TicketRepository
from ...dto.ticket_dto import TicketResponse


class GetTicketUseCase:
    """Use case for reading one ticket"""

    def __init__(self, ticket_repository: TicketRepository) -> None:
        self.ticket_repository = ticket_repository

    async def execute(self, ticket_id: str) -> TicketResponse:
        ticket = await self.ticket_repository.find_by_id(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(f"Ticket {ticket_id} not found", details={"ticket_id": ticket_id})
        return TicketResponse.from_domain(ticket)
