from .auth_dto import OperatorRegistrationRequest, OperatorLoginRequest, TokenResponse
from .user_dto import UserResponse, UserListResponse, UserRoleUpdateRequest, UserStatusUpdateRequest
from .event_dto import EventCreateRequest, EventUpdateRequest, EventResponse, EventListResponse
from .ticket_dto import TicketIssueRequest, FaceEnrollmentRequest, TicketResponse, TicketListResponse
from .gate_dto import GateVerificationRequest, GateVerificationResponse

__all__ = [
    "OperatorRegistrationRequest",
    "OperatorLoginRequest",
    "TokenResponse",
    "UserResponse",
    "UserListResponse",
    "UserRoleUpdateRequest",
    "UserStatusUpdateRequest",
    "EventCreateRequest",
    "EventUpdateRequest",
    "EventResponse",
    "EventListResponse",
    "TicketIssueRequest",
    "FaceEnrollmentRequest",
    "TicketResponse",
    "TicketListResponse",
    "GateVerificationRequest",
    "GateVerificationResponse",
]
