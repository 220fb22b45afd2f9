from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from ...domain.models.ticket import Ticket, TicketClass, TicketStatus


class TicketIssueRequest(BaseModel):
    """DTO for registering a holder for an event"""
    event_id: str = Field(min_length=1)
    holder_name: str = Field(min_length=2, max_length=200)
    email: EmailStr
    national_id: str = Field(min_length=1, max_length=64)
    ticket_class: Optional[TicketClass] = None


class FaceEnrollmentRequest(BaseModel):
    """Base64 capture (raw or data URL) used to bind the holder's face"""
    image: str = Field(min_length=1)


class TicketResponse(BaseModel):
    """Ticket view without biometric payloads"""
    id: str
    event_id: str
    holder_name: str
    holder_email: EmailStr
    ticket_class: TicketClass
    price: Decimal
    status: TicketStatus
    has_biometric: bool = False
    purchased_at: datetime
    enrolled_at: Optional[datetime] = None
    used_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, ticket: Ticket) -> "TicketResponse":
        return cls(
            id=ticket.id or "",
            event_id=ticket.event_id,
            holder_name=ticket.holder.name,
            holder_email=ticket.holder.email,
            ticket_class=ticket.ticket_class,
            price=ticket.price,
            status=ticket.status,
            has_biometric=ticket.has_biometric,
            purchased_at=ticket.purchased_at,
            enrolled_at=ticket.enrolled_at,
            used_at=ticket.used_at,
        )


class TicketListResponse(BaseModel):
    total: int = 0
    items: List[TicketResponse] = Field(default_factory=list)
