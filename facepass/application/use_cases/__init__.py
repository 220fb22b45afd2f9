from .auth import (
    RegisterOperatorUseCase,
    LoginOperatorUseCase,
    GetCurrentOperatorUseCase,
)
from .user import (
    ListOperatorsUseCase,
    UpdateOperatorRoleUseCase,
    SetOperatorActiveUseCase,
)
from .event import (
    CreateEventUseCase,
    GetEventUseCase,
    ListActiveEventsUseCase,
    ListEventsUseCase,
    UpdateEventUseCase,
)
from .ticket import (
    IssueTicketUseCase,
    ConfirmPaymentUseCase,
    EnrollFaceUseCase,
    ExpireTicketUseCase,
    GetTicketUseCase,
    ListEventTicketsUseCase,
)
from .gate import VerifyAtGateUseCase

__all__ = [
    "RegisterOperatorUseCase",
    "LoginOperatorUseCase",
    "GetCurrentOperatorUseCase",
    "ListOperatorsUseCase",
    "UpdateOperatorRoleUseCase",
    "SetOperatorActiveUseCase",
    "CreateEventUseCase",
    "GetEventUseCase",
    "ListActiveEventsUseCase",
    "ListEventsUseCase",
    "UpdateEventUseCase",
    "IssueTicketUseCase",
    "ConfirmPaymentUseCase",
    "EnrollFaceUseCase",
    "ExpireTicketUseCase",
    "GetTicketUseCase",
    "ListEventTicketsUseCase",
    "VerifyAtGateUseCase",
]
