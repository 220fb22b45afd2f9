# Standard library imports
import os
from typing import Final, Optional


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    """

    def __init__(self) -> None:
        # Database Configuration
        self.mongo_uri: Final[str] = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        self.mongo_database_name: Final[str] = os.getenv("MONGO_DB_NAME", "facepass")

        # Operator session (JWT) Configuration
        self.jwt_secret_key: Final[str] = os.getenv("JWT_SECRET_KEY", "change_this_secret_in_production")
        self.jwt_algorithm: Final[str] = os.getenv("JWT_ALGORITHM", "HS256")
        self.session_ttl_minutes: Final[int] = int(
            os.getenv("SESSION_TTL_MINUTES", "1440")
        )

        # Face verification backend: "deepface" (local embeddings) or "groq" (remote judge)
        self.face_verifier_backend: Final[str] = os.getenv("FACE_VERIFIER_BACKEND", "deepface").strip().lower()
        self.verifier_timeout_seconds: Final[float] = float(os.getenv("VERIFIER_TIMEOUT_SECONDS", "10.0"))

        # Comparator tier bounds (strict upper bounds on descriptor distance)
        self.face_match_threshold_high: Final[float] = float(os.getenv("FACE_MATCH_THRESHOLD_HIGH", "0.40"))
        self.face_match_threshold_medium: Final[float] = float(os.getenv("FACE_MATCH_THRESHOLD_MEDIUM", "0.50"))
        self.face_match_threshold_low: Final[float] = float(os.getenv("FACE_MATCH_THRESHOLD_LOW", "0.60"))
        self.face_min_detection_score: Final[float] = float(os.getenv("FACE_MIN_DETECTION_SCORE", "0.7"))

        # Local embedding model (DeepFace)
        self.face_embedding_model: Final[str] = os.getenv("FACE_EMBEDDING_MODEL", "Facenet")
        self.face_detector_backend: Final[str] = os.getenv("FACE_DETECTOR_BACKEND", "opencv")

        # Remote multimodal judge (Groq VLM)
        self.groq_api_key: Final[str] = os.getenv("GROQ_API_KEY", "")
        self.vlm_model: Final[str] = os.getenv("VLM_MODEL", "meta-llama/llama-4-scout-17b-16e-instruct")

        # Admission
        self.enforce_event_capacity: Final[bool] = _env_bool("ENFORCE_EVENT_CAPACITY", "true")

        self.local_timezone: Final[str] = os.getenv("LOCAL_TIMEZONE", "UTC")


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
