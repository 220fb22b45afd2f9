from typing import TYPE_CHECKING
from ...infrastructure.db.mongo_connection import (
    get_database,
    get_user_collection,
    get_event_collection,
    get_ticket_collection,
)

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DatabaseProvider:
    """Centralized database connection provider - single source of truth for all DB connections"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all database collections in the container.
        Repositories and the change feed receive their collections from here.
        """
        database = get_database()

        container.register_singleton("database", database)
        container.register_singleton("user_collection", get_user_collection())
        container.register_singleton("event_collection", get_event_collection())
        container.register_singleton("ticket_collection", get_ticket_collection())
