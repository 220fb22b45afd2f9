# External package imports
from fastapi import APIRouter, Depends, HTTPException, status

# Local application imports
from ...application.dto.event_dto import (
    EventCreateRequest,
    EventListResponse,
    EventResponse,
    EventUpdateRequest,
)
from ...application.dto.ticket_dto import TicketListResponse
from ...application.use_cases.event.create_event import CreateEventUseCase
from ...application.use_cases.event.get_event import GetEventUseCase
from ...application.use_cases.event.list_active_events import ListActiveEventsUseCase
from ...application.use_cases.event.list_events import ListEventsUseCase
from ...application.use_cases.event.update_event import UpdateEventUseCase
from ...application.use_cases.ticket.list_event_tickets import ListEventTicketsUseCase
from ...domain.exceptions import FacePassError
from ...domain.models.session import OperatorSession
from ...domain.models.user import UserRole
from ...di.container import get_container
from .dependencies import require_role
from .error_mapping import to_http_exception


router = APIRouter(tags=["events"])


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    request: EventCreateRequest,
    operator: OperatorSession = Depends(require_role(UserRole.MANAGER)),
) -> EventResponse:
    """Create an event (MANAGER and above)"""
    container = get_container()
    try:
        return await container.get(CreateEventUseCase).execute(request, operator)
    except FacePassError as exception:
        raise to_http_exception(exception)


@router.get("", response_model=EventListResponse)
async def list_active_events() -> EventListResponse:
    """List events open for registration"""
    container = get_container()
    return await container.get(ListActiveEventsUseCase).execute()


@router.get("/all", response_model=EventListResponse)
async def list_all_events(
    operator: OperatorSession = Depends(require_role(UserRole.MANAGER)),
) -> EventListResponse:
    """List every event, including inactive ones (MANAGER and above)"""
    container = get_container()
    try:
        return await container.get(ListEventsUseCase).execute(operator)
    except FacePassError as exception:
        raise to_http_exception(exception)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: str) -> EventResponse:
    """Get one event with its remaining capacity"""
    container = get_container()
    try:
        return await container.get(GetEventUseCase).execute(event_id)
    except FacePassError as exception:
        raise to_http_exception(exception)


@router.patch("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    request: EventUpdateRequest,
    operator: OperatorSession = Depends(require_role(UserRole.MANAGER)),
) -> EventResponse:
    """Edit an event (MANAGER and above); capacity cannot drop below attendees"""
    container = get_container()
    try:
        return await container.get(UpdateEventUseCase).execute(event_id, request, operator)
    except FacePassError as exception:
        raise to_http_exception(exception)
    except ValueError as exception:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exception)
        )


@router.get("/{event_id}/tickets", response_model=TicketListResponse)
async def list_event_tickets(
    event_id: str,
    operator: OperatorSession = Depends(require_role(UserRole.OPERATOR)),
) -> TicketListResponse:
    """List all tickets of an event (OPERATOR and above)"""
    container = get_container()
    try:
        return await container.get(ListEventTicketsUseCase).execute(event_id, operator)
    except FacePassError as exception:
        raise to_http_exception(exception)
