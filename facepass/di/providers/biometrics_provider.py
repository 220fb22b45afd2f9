import logging
from typing import TYPE_CHECKING

from ...core.config import get_settings
from ...domain.services.face_verifier import FaceVerifier
from ...infrastructure.biometrics.deepface_verifier import DeepFaceVerifier
from ...infrastructure.biometrics.groq_face_judge import GroqFaceJudge
from ...infrastructure.http_client_factory import get_shared_http_client

if TYPE_CHECKING:
    from ..base_container import BaseContainer

logger = logging.getLogger(__name__)

FACE_VERIFIER_BACKENDS = {
    "deepface": DeepFaceVerifier,
    "groq": GroqFaceJudge,
}


class BiometricsProvider:
    """Selects the FaceVerifier implementation from FACE_VERIFIER_BACKEND"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Raises:
            ValueError: If the configured backend name is unknown
        """
        settings = get_settings()
        backend = settings.face_verifier_backend
        verifier_class = FACE_VERIFIER_BACKENDS.get(backend)
        if verifier_class is None:
            raise ValueError(
                f"Unknown FACE_VERIFIER_BACKEND '{backend}'. Expected one of: {', '.join(FACE_VERIFIER_BACKENDS)}"
            )

        if verifier_class is GroqFaceJudge:
            verifier = GroqFaceJudge(http_client=get_shared_http_client(settings.verifier_timeout_seconds))
        else:
            verifier = verifier_class()

        container.register_singleton(FaceVerifier, verifier)
        logger.info(f"Face verifier backend: {backend}")
