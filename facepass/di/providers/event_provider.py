from typing import TYPE_CHECKING

from ...core.config import get_settings
from ...domain.repositories.event_repository import EventRepository
from ...domain.repositories.ticket_repository import TicketRepository
from ...application.services.admission_controller import AdmissionController
from ...application.services.event_snapshot_service import EventSnapshotService
from ...application.use_cases.event.create_event import CreateEventUseCase
from ...application.use_cases.event.get_event import GetEventUseCase
from ...application.use_cases.event.list_active_events import ListActiveEventsUseCase
from ...application.use_cases.event.list_events import ListEventsUseCase
from ...application.use_cases.event.update_event import UpdateEventUseCase
from ...infrastructure.notifications.snapshot_feed import SnapshotFeed

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class EventProvider:
    """Event services and use cases: admission counter, snapshot feed, event admin"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        settings = get_settings()

        container.register_singleton(
            AdmissionController,
            AdmissionController(
                event_repository=container.get(EventRepository),
                enforce_capacity=settings.enforce_event_capacity,
            ),
        )

        feed = SnapshotFeed()
        container.register_singleton(SnapshotFeed, feed)
        container.register_singleton(
            EventSnapshotService,
            EventSnapshotService(
                event_repository=container.get(EventRepository),
                ticket_repository=container.get(TicketRepository),
                feed=feed,
            ),
        )

        container.register_factory(
            CreateEventUseCase,
            lambda: CreateEventUseCase(event_repository=container.get(EventRepository)),
        )

        container.register_factory(
            GetEventUseCase,
            lambda: GetEventUseCase(event_repository=container.get(EventRepository)),
        )

        container.register_factory(
            ListActiveEventsUseCase,
            lambda: ListActiveEventsUseCase(event_repository=container.get(EventRepository)),
        )

        container.register_factory(
            ListEventsUseCase,
            lambda: ListEventsUseCase(event_repository=container.get(EventRepository)),
        )

        container.register_factory(
            UpdateEventUseCase,
            lambda: UpdateEventUseCase(event_repository=container.get(EventRepository)),
        )
