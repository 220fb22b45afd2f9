# Standard library imports
from abc import ABC, abstractmethod

# Local application imports
from ..models.face import FaceExtraction, FaceVerdict
from ..models.ticket import Ticket


class FaceVerifier(ABC):
    """
    Biometric capability consumed by enrollment and the gate.

    Implementations either extract descriptors locally or delegate the whole
    judgement to a remote model. Callers never special-case either.

    Both methods raise ServiceUnavailableError when the backend times out,
    is unreachable, or answers with something that cannot be trusted.
    """

    #: True when enrollment produces a FaceDescriptor to persist
    uses_descriptors: bool = True

    @abstractmethod
    async def extract(self, image: str) -> FaceExtraction:
        """Analyse an enrollment capture (base64 / data URL)."""
        pass

    @abstractmethod
    async def verify(self, capture: str, ticket: Ticket) -> FaceVerdict:
        """Compare a live capture against the ticket's own enrolled biometric."""
        pass
