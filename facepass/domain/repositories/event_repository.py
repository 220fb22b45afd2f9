from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..models.event import Event


class EventRepository(ABC):
    """Repository interface - defines contract for event data access"""

    @abstractmethod
    async def create(self, event: Event) -> Event:
        """Create event and return it with its ID set"""
        pass

    @abstractmethod
    async def find_by_id(self, event_id: str) -> Optional[Event]:
        """Find event by ID"""
        pass

    @abstractmethod
    async def list_active(self) -> List[Event]:
        """List active events ordered by start time ascending"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Event]:
        """List every event, active or not, newest first"""
        pass

    @abstractmethod
    async def update(self, event_id: str, changes: Dict[str, Any]) -> Optional[Event]:
        """
        Apply field changes (keyed by EventFields) in one conditional write.

        A new max_capacity only applies while it is not below
        current_attendees at the moment of the write. Returns the updated
        event, or None when the event does not exist or the guard rejected
        the update.
        """
        pass

    @abstractmethod
    async def increment_attendees(self, event_id: str, enforce_capacity: bool) -> Optional[Event]:
        """
        Atomically add one attendee.

        With ``enforce_capacity`` the increment only applies while
        current_attendees < max_capacity. Returns the updated event, or None
        when the event does not exist or the guard rejected the update.
        """
        pass

    @abstractmethod
    async def decrement_attendees(self, event_id: str) -> Optional[Event]:
        """Atomically remove one attendee, never going below zero"""
        pass
