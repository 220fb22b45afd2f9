from typing import TYPE_CHECKING
from ...domain.repositories.user_repository import UserRepository
from ...domain.repositories.event_repository import EventRepository
from ...domain.repositories.ticket_repository import TicketRepository
from ...infrastructure.db.mongo_user_repository import MongoUserRepository
from ...infrastructure.db.mongo_event_repository import MongoEventRepository
from ...infrastructure.db.mongo_ticket_repository import MongoTicketRepository

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class RepositoryProvider:
    """Repository registration provider - wires domain interfaces to infrastructure implementations"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all repository implementations.
        Gets collections from database provider and creates repository instances.
        """
        container.register_singleton(
            UserRepository,
            MongoUserRepository(user_collection=container.get("user_collection"))
        )

        container.register_singleton(
            EventRepository,
            MongoEventRepository(event_collection=container.get("event_collection"))
        )

        container.register_singleton(
            TicketRepository,
            MongoTicketRepository(ticket_collection=container.get("ticket_collection"))
        )
