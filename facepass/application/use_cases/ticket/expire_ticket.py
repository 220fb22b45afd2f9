# Standard library imports
import logging

# Local application imports
from ....domain.exceptions import TicketNotFoundError
from ....domain.models.session import OperatorSession
from ....domain.models.ticket import TicketStatus
from ....domain.models.user import UserRole
from ....domain.repositories.ticket_repository import TicketRepository
from ....domain.services import ticket_lifecycle
from ....utils.datetime_utils import utc_now
from ...dto.ticket_dto import TicketResponse

logger = logging.getLogger(__name__)


class ExpireTicketUseCase:
    """
    Use case for administratively expiring a ticket (MANAGER and above).

    Attendance is not decremented: an ACTIVE ticket keeps its slot counted.
    """

    MAX_ATTEMPTS = 3

    def __init__(self, ticket_repository: TicketRepository) -> None:
        self.ticket_repository = ticket_repository

    async def execute(self, ticket_id: str, operator: OperatorSession) -> TicketResponse:
        operator.require(UserRole.MANAGER, utc_now())

        for _ in range(self.MAX_ATTEMPTS):
            ticket = await self.ticket_repository.find_by_id(ticket_id)
            if ticket is None:
                raise TicketNotFoundError(f"Ticket {ticket_id} not found", details={"ticket_id": ticket_id})
            ticket_lifecycle.ensure_can_expire(ticket)

            updated = await self.ticket_repository.transition_status(ticket_id, ticket.status, TicketStatus.EXPIRED)
            if updated is not None:
                logger.info(f"Ticket {ticket_id} expired from {ticket.status.value} by {operator.user_id}")
                return TicketResponse.from_domain(updated)
            # Status moved underneath us (payment, enrollment, admission); re-evaluate

        raise RuntimeError(f"Ticket {ticket_id} kept changing while expiring")
