# Standard library imports
import logging

# Local application imports
from ....domain.exceptions import InvalidStateTransitionError, TicketNotFoundError
from ....domain.models.session import OperatorSession
from ....domain.models.ticket import TicketStatus
from ....domain.models.user import UserRole
from ....domain.repositories.ticket_repository import TicketRepository
from ....domain.services import ticket_lifecycle
from ....utils.datetime_utils import utc_now
from ...dto.ticket_dto import TicketResponse

logger = logging.getLogger(__name__)


class ConfirmPaymentUseCase:
    """Use case for recording an externally confirmed payment"""

    def __init__(self, ticket_repository: TicketRepository) -> None:
        self.ticket_repository = ticket_repository

    async def execute(self, ticket_id: str, operator: OperatorSession) -> TicketResponse:
        """
        Move a ticket from PENDING_PAYMENT to PAID_PENDING_FACE

        Raises:
            TicketNotFoundError: If the ticket does not exist
            InvalidStateTransitionError / AlreadyUsedError: If the ticket is not awaiting payment
        """
        operator.require(UserRole.OPERATOR, utc_now())

        ticket = await self.ticket_repository.find_by_id(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(f"Ticket {ticket_id} not found", details={"ticket_id": ticket_id})
        ticket_lifecycle.ensure_can_confirm_payment(ticket)

        updated = await self.ticket_repository.transition_status(
            ticket_id, TicketStatus.PENDING_PAYMENT, TicketStatus.PAID_PENDING_FACE
        )
        if updated is None:
            # Lost a race: report against the state that won
            current = await self.ticket_repository.find_by_id(ticket_id)
            if current is None:
                raise TicketNotFoundError(f"Ticket {ticket_id} not found", details={"ticket_id": ticket_id})
            ticket_lifecycle.ensure_can_confirm_payment(current)
            raise InvalidStateTransitionError(
                f"Ticket {ticket_id} changed concurrently", details={"ticket_id": ticket_id}
            )

        logger.info(f"Payment confirmed for ticket {ticket_id} by {operator.user_id}")
        return TicketResponse.from_domain(updated)
