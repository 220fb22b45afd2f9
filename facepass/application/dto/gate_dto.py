from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from ...domain.models.face import ConfidenceTier
from ...domain.models.verification import VerificationResult


class GateVerificationRequest(BaseModel):
    """One gate attempt: the claimed identity plus a live capture"""
    event_id: str = Field(min_length=1)
    email: EmailStr
    image: str = Field(min_length=1)


class GateVerificationResponse(BaseModel):
    granted: bool
    kind: Optional[str] = None
    message: str
    tier: Optional[ConfidenceTier] = None
    distance: Optional[float] = None
    audit: str
    ticket_id: Optional[str] = None
    holder_name: Optional[str] = None

    @classmethod
    def from_result(cls, result: VerificationResult) -> "GateVerificationResponse":
        return cls(
            granted=result.granted,
            kind=result.kind.value if result.kind else None,
            message=result.message,
            tier=result.tier,
            distance=result.distance,
            audit=result.audit,
            ticket_id=result.ticket.id if result.ticket else None,
            holder_name=result.ticket.holder.name if result.ticket else None,
        )
