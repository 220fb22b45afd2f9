from .mongo_connection import get_database, get_user_collection, get_event_collection, get_ticket_collection
from .mongo_user_repository import MongoUserRepository
from .mongo_event_repository import MongoEventRepository
from .mongo_ticket_repository import MongoTicketRepository

__all__ = [
    "get_database",
    "get_user_collection",
    "get_event_collection",
    "get_ticket_collection",
    "MongoUserRepository",
    "MongoEventRepository",
    "MongoTicketRepository",
]
