from .user_repository import UserRepository
from .event_repository import EventRepository
from .ticket_repository import TicketRepository

__all__ = ["UserRepository", "EventRepository", "TicketRepository"]
