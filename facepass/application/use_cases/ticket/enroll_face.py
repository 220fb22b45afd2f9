# Standard library imports
import asyncio
import logging
from typing import Optional

# Local application imports
from ....domain.exceptions import (
    DescriptorInvalidError,
    InvalidStateTransitionError,
    NoFaceDetectedError,
    ServiceUnavailableError,
    TicketNotFoundError,
)
from ....domain.models.ticket import Ticket
from ....domain.repositories.ticket_repository import TicketRepository
from ....domain.services import ticket_lifecycle
from ....domain.services.face_verifier import FaceVerifier
from ...dto.ticket_dto import TicketResponse
from ...services.admission_controller import AdmissionController

logger = logging.getLogger(__name__)


class EnrollFaceUseCase:
    """
    Use case for binding the holder's face to a paid ticket.

    Order: validate the capture, reserve an attendance slot, then activate
    the ticket with a conditional write. If activation loses a race the slot
    is released, so the counter only moves for tickets that reached ACTIVE.
    """

    def __init__(
        self,
        ticket_repository: TicketRepository,
        face_verifier: FaceVerifier,
        admission_controller: AdmissionController,
        timeout_seconds: float = 10.0,
    ) -> None:
        self.ticket_repository = ticket_repository
        self.face_verifier = face_verifier
        self.admission_controller = admission_controller
        self.timeout_seconds = timeout_seconds

    async def execute(self, ticket_id: str, image: str) -> TicketResponse:
        """
        Raises:
            TicketNotFoundError: If the ticket does not exist
            InvalidStateTransitionError / AlreadyUsedError: If the ticket is not awaiting enrollment
            DescriptorInvalidError: If the capture is unusable (no face, unreadable, low quality)
            ServiceUnavailableError: If the face backend fails or times out
            CapacityExceededError: If the event filled up
        """
        ticket = await self._load(ticket_id)
        ticket_lifecycle.ensure_can_enroll(ticket)

        try:
            extraction = await asyncio.wait_for(self.face_verifier.extract(image), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            raise ServiceUnavailableError(f"Face extraction timed out after {self.timeout_seconds}s")
        except NoFaceDetectedError as e:
            # Unreadable payloads surface as no-face from the backends
            raise DescriptorInvalidError(
                f"Enrollment capture for ticket {ticket_id} rejected: {e.message}",
                user_message=e.user_message,
                details={"reason": e.message},
            )

        if not extraction.face_detected:
            raise DescriptorInvalidError(
                f"Enrollment capture for ticket {ticket_id} has no face: {extraction.reason}",
                user_message=NoFaceDetectedError.default_user_message,
                details={"reason": extraction.reason},
            )
        if not extraction.is_valid:
            raise DescriptorInvalidError(
                f"Enrollment capture for ticket {ticket_id} rejected: {extraction.reason}",
                details={"reason": extraction.reason},
            )

        if self.face_verifier.uses_descriptors:
            if extraction.descriptor is None:
                raise DescriptorInvalidError(f"No descriptor extracted for ticket {ticket_id}")
            descriptor, face_image = extraction.descriptor, None
        else:
            descriptor, face_image = None, image

        await self.admission_controller.on_ticket_issued(ticket.event_id)

        activated: Optional[Ticket] = None
        try:
            activated = await self.ticket_repository.bind_face(ticket_id, descriptor, face_image)
        finally:
            # The slot stays reserved only for tickets that reached ACTIVE
            if activated is None:
                await self.admission_controller.release(ticket.event_id)

        if activated is None:
            current = await self._load(ticket_id)
            # Raises the error matching whoever won the race
            ticket_lifecycle.ensure_can_enroll(current)
            raise InvalidStateTransitionError(
                f"Ticket {ticket_id} could not be activated", details={"ticket_id": ticket_id}
            )

        logger.info(f"Ticket {ticket_id} enrolled and activated for event {activated.event_id}")
        return TicketResponse.from_domain(activated)

    async def _load(self, ticket_id: str) -> Ticket:
        ticket = await self.ticket_repository.find_by_id(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(f"Ticket {ticket_id} not found", details={"ticket_id": ticket_id})
        return ticket
