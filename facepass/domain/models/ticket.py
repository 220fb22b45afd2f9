# Standard library imports
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

# Local application imports
from .face import FaceDescriptor


class TicketStatus(str, Enum):
    PENDING_PAYMENT = "PENDING_PAYMENT"
    PAID_PENDING_FACE = "PAID_PENDING_FACE"
    ACTIVE = "ACTIVE"
    USED = "USED"
    EXPIRED = "EXPIRED"


class TicketClass(str, Enum):
    FREE = "FREE"
    STANDARD = "STANDARD"
    VIP = "VIP"
    BACKSTAGE = "BACKSTAGE"


@dataclass(frozen=True)
class TicketHolder:
    """Registrant identity. Email is the gate claim key."""
    name: str
    email: str
    national_id: str

    def __post_init__(self) -> None:
        if not self.name or len(self.name.strip()) < 2:
            raise ValueError("Holder name must be at least 2 characters")
        if not self.email or "@" not in self.email:
            raise ValueError("Invalid email format")
        if not self.national_id or not self.national_id.strip():
            raise ValueError("Holder national ID is required")
        object.__setattr__(self, "email", normalize_email(self.email))


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass(frozen=True)
class Ticket:
    """
    Pure domain model for a Ticket.

    Frozen: status changes only through the lifecycle rules, and every change
    is persisted as an atomic repository update that returns a new snapshot.
    Price and the enrolled biometric never change after they are set.
    """
    id: Optional[str]
    event_id: str
    holder: TicketHolder
    ticket_class: TicketClass
    price: Decimal
    status: TicketStatus
    purchased_at: datetime
    face_descriptor: Optional[FaceDescriptor] = None
    face_image: Optional[str] = None  # reference capture for judge-style backends
    enrolled_at: Optional[datetime] = None
    used_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if not self.event_id:
            raise ValueError("Event ID is required")
        if self.price < 0:
            raise ValueError("Ticket price cannot be negative")
        if self.ticket_class is TicketClass.FREE and self.price != 0:
            raise ValueError("Free tickets must have price 0")

    @property
    def has_biometric(self) -> bool:
        return self.face_descriptor is not None or bool(self.face_image)
