from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Event:
    """Domain model for an Event with capacity bookkeeping"""

    id: Optional[str]
    name: str
    description: str
    location: str
    starts_at: datetime
    max_capacity: int
    current_attendees: int
    is_active: bool
    is_free: bool
    price: Decimal
    created_at: Optional[datetime] = None
    image_url: Optional[str] = None

    def __post_init__(self):
        """Business validations"""
        if not self.name or len(self.name.strip()) < 2:
            raise ValueError("Event name must be at least 2 characters")
        if self.max_capacity < 0:
            raise ValueError("Capacity cannot be negative")
        if self.current_attendees < 0:
            raise ValueError("Attendee count cannot be negative")
        if self.price < 0:
            raise ValueError("Event price cannot be negative")
        if self.is_free and self.price != 0:
            raise ValueError("Free events must have price 0")

    @property
    def capacity_remaining(self) -> int:
        return max(0, self.max_capacity - self.current_attendees)
