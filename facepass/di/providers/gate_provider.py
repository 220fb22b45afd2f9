from typing import TYPE_CHECKING

from ...core.config import get_settings
from ...domain.repositories.ticket_repository import TicketRepository
from ...domain.services.face_verifier import FaceVerifier
from ...application.use_cases.gate.verify_at_gate import VerifyAtGateUseCase

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class GateProvider:
    """Gate verification use case provider"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        settings = get_settings()

        container.register_factory(
            VerifyAtGateUseCase,
            lambda: VerifyAtGateUseCase(
                ticket_repository=container.get(TicketRepository),
                face_verifier=container.get(FaceVerifier),
                timeout_seconds=settings.verifier_timeout_seconds,
            ),
        )
