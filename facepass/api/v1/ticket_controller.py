# External package imports
from fastapi import APIRouter, Depends, HTTPException, status

# Local application imports
from ...application.dto.ticket_dto import FaceEnrollmentRequest, TicketIssueRequest, TicketResponse
from ...application.use_cases.ticket.issue_ticket import IssueTicketUseCase
from ...application.use_cases.ticket.confirm_payment import ConfirmPaymentUseCase
from ...application.use_cases.ticket.enroll_face import EnrollFaceUseCase
from ...application.use_cases.ticket.expire_ticket import ExpireTicketUseCase
from ...application.use_cases.ticket.get_ticket import GetTicketUseCase
from ...domain.exceptions import FacePassError
from ...domain.models.session import OperatorSession
from ...domain.models.user import UserRole
from ...di.container import get_container
from .dependencies import require_role
from .error_mapping import to_http_exception


router = APIRouter(tags=["tickets"])


@router.post("", response_model=TicketResponse, status_code=status.HTTP_201_CREATED)
async def issue_ticket(request: TicketIssueRequest) -> TicketResponse:
    """
    Register a holder for an event

    Free events yield a ticket awaiting face enrollment; paid events yield a
    ticket awaiting payment.
    """
    container = get_container()
    try:
        return await container.get(IssueTicketUseCase).execute(request)
    except FacePassError as exception:
        raise to_http_exception(exception)
    except ValueError as exception:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exception)
        )


@router.get("/{ticket_id}", response_model=TicketResponse)
async def get_ticket(ticket_id: str) -> TicketResponse:
    container = get_container()
    try:
        return await container.get(GetTicketUseCase).execute(ticket_id)
    except FacePassError as exception:
        raise to_http_exception(exception)


@router.post("/{ticket_id}/confirm-payment", response_model=TicketResponse)
async def confirm_payment(
    ticket_id: str,
    operator: OperatorSession = Depends(require_role(UserRole.OPERATOR)),
) -> TicketResponse:
    """Record an externally confirmed payment (OPERATOR and above)"""
    container = get_container()
    try:
        return await container.get(ConfirmPaymentUseCase).execute(ticket_id, operator)
    except FacePassError as exception:
        raise to_http_exception(exception)


@router.post("/{ticket_id}/enroll", response_model=TicketResponse)
async def enroll_face(ticket_id: str, request: FaceEnrollmentRequest) -> TicketResponse:
    """Bind the holder's face to a paid ticket and activate it"""
    container = get_container()
    try:
        return await container.get(EnrollFaceUseCase).execute(ticket_id, request.image)
    except FacePassError as exception:
        raise to_http_exception(exception)


@router.post("/{ticket_id}/expire", response_model=TicketResponse)
async def expire_ticket(
    ticket_id: str,
    operator: OperatorSession = Depends(require_role(UserRole.MANAGER)),
) -> TicketResponse:
    """Expire a ticket (MANAGER and above)"""
    container = get_container()
    try:
        return await container.get(ExpireTicketUseCase).execute(ticket_id, operator)
    except FacePassError as exception:
        raise to_http_exception(exception)
