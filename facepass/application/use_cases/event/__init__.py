from .create_event import CreateEventUseCase
from .get_event import GetEventUseCase
from .list_active_events import ListActiveEventsUseCase
from .list_events import ListEventsUseCase
from .update_event import UpdateEventUseCase

__all__ = [
    "CreateEventUseCase",
    "GetEventUseCase",
    "ListActiveEventsUseCase",
    "ListEventsUseCase",
    "UpdateEventUseCase",
]
