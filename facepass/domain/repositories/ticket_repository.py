from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..models.face import FaceDescriptor
from ..models.ticket import Ticket, TicketStatus


class TicketRepository(ABC):
    """
    Repository interface - defines contract for ticket data access.

    Status changes are conditional single-document updates (compare-and-set):
    the write only applies when the stored status equals ``expected``.
    """

    @abstractmethod
    async def create(self, ticket: Ticket) -> Ticket:
        """
        Insert a ticket and return it with its ID set

        Raises:
            DuplicateClaimError: If the holder already has a ticket in a claim-holding
                status for the same event
        """
        pass

    @abstractmethod
    async def find_by_id(self, ticket_id: str) -> Optional[Ticket]:
        """Find ticket by ID"""
        pass

    @abstractmethod
    async def find_unused_by_claim(self, event_id: str, email: str) -> List[Ticket]:
        """Find the event's tickets held by ``email`` whose status is not USED"""
        pass

    @abstractmethod
    async def list_by_event(self, event_id: str) -> List[Ticket]:
        """List all tickets of an event, newest first"""
        pass

    @abstractmethod
    async def transition_status(
        self,
        ticket_id: str,
        expected: TicketStatus,
        new_status: TicketStatus,
        extra_fields: Optional[Dict[str, Any]] = None,
    ) -> Optional[Ticket]:
        """
        Atomically move a ticket from ``expected`` to ``new_status``.

        Returns the updated ticket, or None if the ticket does not exist or its
        status was no longer ``expected``.
        """
        pass

    @abstractmethod
    async def bind_face(
        self,
        ticket_id: str,
        descriptor: Optional[FaceDescriptor],
        face_image: Optional[str],
    ) -> Optional[Ticket]:
        """
        Atomically attach the enrolled biometric and activate the ticket.

        Applies only while the ticket is PAID_PENDING_FACE and carries no
        biometric yet. Returns the updated ticket or None.
        """
        pass
