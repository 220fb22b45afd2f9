from typing import TYPE_CHECKING

from ...core.config import get_settings
from ...domain.repositories.event_repository import EventRepository
from ...domain.repositories.ticket_repository import TicketRepository
from ...domain.services.face_verifier import FaceVerifier
from ...application.services.admission_controller import AdmissionController
from ...application.use_cases.ticket.issue_ticket import IssueTicketUseCase
from ...application.use_cases.ticket.confirm_payment import ConfirmPaymentUseCase
from ...application.use_cases.ticket.enroll_face import EnrollFaceUseCase
from ...application.use_cases.ticket.expire_ticket import ExpireTicketUseCase
from ...application.use_cases.ticket.get_ticket import GetTicketUseCase
from ...application.use_cases.ticket.list_event_tickets import ListEventTicketsUseCase

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class TicketProvider:
    """Ticket use case provider - registers all ticket lifecycle use cases"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        settings = get_settings()

        container.register_factory(
            IssueTicketUseCase,
            lambda: IssueTicketUseCase(
                ticket_repository=container.get(TicketRepository),
                event_repository=container.get(EventRepository),
                enforce_capacity=settings.enforce_event_capacity,
            ),
        )

        container.register_factory(
            ConfirmPaymentUseCase,
            lambda: ConfirmPaymentUseCase(ticket_repository=container.get(TicketRepository)),
        )

        container.register_factory(
            EnrollFaceUseCase,
            lambda: EnrollFaceUseCase(
                ticket_repository=container.get(TicketRepository),
                face_verifier=container.get(FaceVerifier),
                admission_controller=container.get(AdmissionController),
                timeout_seconds=settings.verifier_timeout_seconds,
            ),
        )

        container.register_factory(
            ExpireTicketUseCase,
            lambda: ExpireTicketUseCase(ticket_repository=container.get(TicketRepository)),
        )

        container.register_factory(
            GetTicketUseCase,
            lambda: GetTicketUseCase(ticket_repository=container.get(TicketRepository)),
        )

        container.register_factory(
            ListEventTicketsUseCase,
            lambda: ListEventTicketsUseCase(
                ticket_repository=container.get(TicketRepository),
                event_repository=container.get(EventRepository),
            ),
        )
