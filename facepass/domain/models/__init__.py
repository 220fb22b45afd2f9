from .face import ConfidenceTier, FaceDescriptor, FaceExtraction, FaceVerdict
from .ticket import Ticket, TicketClass, TicketHolder, TicketStatus, normalize_email
from .event import Event
from .user import User, UserRole, has_permission
from .session import OperatorSession
from .verification import GateAttemptState, VerificationResult

__all__ = [
    "ConfidenceTier",
    "FaceDescriptor",
    "FaceExtraction",
    "FaceVerdict",
    "Ticket",
    "TicketClass",
    "TicketHolder",
    "TicketStatus",
    "normalize_email",
    "Event",
    "User",
    "UserRole",
    "has_permission",
    "OperatorSession",
    "GateAttemptState",
    "VerificationResult",
]
