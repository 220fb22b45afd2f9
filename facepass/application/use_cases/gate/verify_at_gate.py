"""
Gate verification: claimed identity + live capture -> admit or deny.

Fail closed. Every error, timeout or ambiguous answer ends in a denial, and
admission is committed only through the ACTIVE -> USED conditional write.
"""
# Standard library imports
import asyncio
import logging
from typing import List, Optional

# Local application imports
from ....domain.constants import TicketFields
from ....domain.exceptions import (
    AlreadyUsedError,
    ClaimNotFoundError,
    FaceMismatchError,
    FacePassError,
    NoFaceDetectedError,
    ServiceUnavailableError,
)
from ....domain.models.face import FaceVerdict
from ....domain.models.session import OperatorSession
from ....domain.models.ticket import Ticket, TicketStatus
from ....domain.models.user import UserRole
from ....domain.models.verification import GateAttemptState, VerificationResult
from ....domain.repositories.ticket_repository import TicketRepository
from ....domain.services import ticket_lifecycle
from ....domain.services.face_verifier import FaceVerifier
from ....utils.datetime_utils import utc_now

logger = logging.getLogger(__name__)


_NO_FACE_AT_GATE = "No face detected. Ask the holder to face the camera and retry."


def _deny(error: FacePassError, verdict: Optional[FaceVerdict] = None) -> VerificationResult:
    return VerificationResult(
        granted=False,
        message=error.user_message,
        kind=error.kind,
        tier=verdict.tier if verdict else None,
        distance=verdict.distance if verdict else None,
        state=GateAttemptState.DECIDED,
    )


def select_claim(candidates: List[Ticket]) -> Optional[Ticket]:
    """
    Pick the single ticket a claim refers to.

    Expired tickets only count when nothing else is left. Two live tickets for
    one claim cannot be told apart, so the claim resolves to nothing.
    """
    live = [t for t in candidates if t.status is not TicketStatus.EXPIRED]
    if len(live) == 1:
        return live[0]
    if not live and candidates:
        return candidates[0]
    return None


class VerifyAtGateUseCase:
    """Orchestrates one gate attempt. Never raises for a denial."""

    def __init__(
        self,
        ticket_repository: TicketRepository,
        face_verifier: FaceVerifier,
        timeout_seconds: float = 10.0,
    ) -> None:
        self.ticket_repository = ticket_repository
        self.face_verifier = face_verifier
        self.timeout_seconds = timeout_seconds

    async def execute(
        self,
        event_id: str,
        claim_email: str,
        capture: str,
        operator: OperatorSession,
    ) -> VerificationResult:
        """
        Run a gate attempt for the claimed identity

        Raises:
            SessionExpiredError / PermissionDeniedError: If the operator may not run the gate
        """
        operator.require(UserRole.OPERATOR, utc_now())

        try:
            result = await self._attempt(event_id, claim_email, capture)
        except Exception as e:
            logger.error(f"Unexpected failure during gate attempt at event {event_id}: {e}", exc_info=True)
            result = _deny(ServiceUnavailableError(f"Gate attempt failed: {e}"))

        ticket_id = result.ticket.id if result.ticket else "-"
        if result.granted:
            logger.info(f"Gate event={event_id} ticket={ticket_id} operator={operator.user_id} {result.audit}")
        else:
            logger.warning(f"Gate event={event_id} operator={operator.user_id} {result.audit}: {result.message}")
        return result

    async def _attempt(self, event_id: str, claim_email: str, capture: str) -> VerificationResult:
        # AWAITING_CLAIM
        candidates = await self.ticket_repository.find_unused_by_claim(event_id, claim_email)
        ticket = select_claim(candidates)
        if ticket is None:
            return _deny(ClaimNotFoundError(f"No single live ticket for {claim_email} at event {event_id}"))

        # CLAIM_RESOLVED: only ACTIVE tickets reach the biometric backend
        try:
            ticket_lifecycle.ensure_can_admit(ticket)
        except FacePassError as e:
            return _deny(e)

        # COMPARING
        try:
            verdict = await asyncio.wait_for(
                self.face_verifier.verify(capture, ticket),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Face verification timed out after {self.timeout_seconds}s for ticket {ticket.id}")
            return _deny(ServiceUnavailableError(f"Face verification timed out for ticket {ticket.id}"))
        except FacePassError as e:
            logger.warning(f"Face verification failed for ticket {ticket.id}: {e.message}")
            return _deny(e)

        if not verdict.face_detected:
            return _deny(NoFaceDetectedError(verdict.reason or "No face in capture", user_message=_NO_FACE_AT_GATE), verdict)
        if not verdict.matched or not verdict.tier.is_match:
            return _deny(FaceMismatchError(f"Capture does not match ticket {ticket.id}"), verdict)

        # DECIDED: commit admission; losing the race means someone else entered
        admitted = await self.ticket_repository.transition_status(
            ticket.id,
            TicketStatus.ACTIVE,
            TicketStatus.USED,
            {TicketFields.USED_AT: utc_now()},
        )
        if admitted is None:
            return _deny(AlreadyUsedError(f"Ticket {ticket.id} was admitted concurrently"), verdict)

        return VerificationResult(
            granted=True,
            message=f"Access granted. Welcome, {admitted.holder.name}.",
            tier=verdict.tier,
            distance=verdict.distance,
            ticket=admitted,
        )
