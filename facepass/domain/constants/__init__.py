"""Constants for domain model field names"""

from .user_fields import UserFields
from .event_fields import EventFields
from .ticket_fields import TicketFields
from .ticket_prices import DEFAULT_TICKET_PRICES

__all__ = [
    "UserFields",
    "EventFields",
    "TicketFields",
    "DEFAULT_TICKET_PRICES",
]
