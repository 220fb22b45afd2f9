from .issue_ticket import IssueTicketUseCase, resolve_price
from .confirm_payment import ConfirmPaymentUseCase
from .enroll_face import EnrollFaceUseCase
from .expire_ticket import ExpireTicketUseCase
from .get_ticket import GetTicketUseCase
from .list_event_tickets import ListEventTicketsUseCase

__all__ = [
    "IssueTicketUseCase",
    "resolve_price",
    "ConfirmPaymentUseCase",
    "EnrollFaceUseCase",
    "ExpireTicketUseCase",
    "GetTicketUseCase",
    "ListEventTicketsUseCase",
]
