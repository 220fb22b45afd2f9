from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from ...domain.models.event import Event


class EventCreateRequest(BaseModel):
    name: str = Field(min_length=2, max_length=200)
    description: str = ""
    location: str = ""
    starts_at: datetime
    max_capacity: int = Field(ge=0)
    is_free: bool = False
    price: Decimal = Field(default=Decimal("0"), ge=0)
    is_active: bool = True
    image_url: Optional[str] = None

    @model_validator(mode="after")
    def check_free_price(self) -> "EventCreateRequest":
        if self.is_free and self.price != 0:
            raise ValueError("Free events must have price 0")
        return self


class EventUpdateRequest(BaseModel):
    """Partial update; omitted fields keep their value. Free/paid cannot change."""
    name: Optional[str] = Field(default=None, min_length=2, max_length=200)
    description: Optional[str] = None
    location: Optional[str] = None
    starts_at: Optional[datetime] = None
    max_capacity: Optional[int] = Field(default=None, ge=0)
    price: Optional[Decimal] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
    image_url: Optional[str] = None


class EventResponse(BaseModel):
    id: str
    name: str
    description: str
    location: str
    starts_at: datetime
    max_capacity: int
    current_attendees: int
    capacity_remaining: int
    is_active: bool
    is_free: bool
    price: Decimal
    created_at: Optional[datetime] = None
    image_url: Optional[str] = None

    @classmethod
    def from_domain(cls, event: Event) -> "EventResponse":
        return cls(
            id=event.id or "",
            name=event.name,
            description=event.description,
            location=event.location,
            starts_at=event.starts_at,
            max_capacity=event.max_capacity,
            current_attendees=event.current_attendees,
            capacity_remaining=event.capacity_remaining,
            is_active=event.is_active,
            is_free=event.is_free,
            price=event.price,
            created_at=event.created_at,
            image_url=event.image_url,
        )


class EventListResponse(BaseModel):
    total: int = 0
    items: List[EventResponse] = Field(default_factory=list)
