"""
Shared pytest fixtures for FacePass tests.
"""
import os
from unittest.mock import MagicMock, patch

import pytest

from facepass.domain.models.user import UserRole
from tests.fakes import (
    InMemoryEventRepository,
    InMemoryTicketRepository,
    InMemoryUserRepository,
    make_session,
)


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    env_vars = {
        "MONGO_URI": "mongodb://localhost:27017",
        "MONGO_DB_NAME": "test_facepass_db",
        "JWT_SECRET_KEY": "test_secret_key_for_testing_only",
        "GROQ_API_KEY": "test_groq_key_placeholder",
        "LOCAL_TIMEZONE": "UTC",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def mock_settings():
    """Fixture to mock get_settings for tests. Patches all modules that use it."""
    mock = MagicMock()
    mock.mongo_uri = "mongodb://localhost:27017"
    mock.mongo_database_name = "test_db"
    mock.jwt_secret_key = "test_jwt_secret_with_enough_length_for_hs256"
    mock.jwt_algorithm = "HS256"
    mock.session_ttl_minutes = 1440
    mock.face_verifier_backend = "deepface"
    mock.verifier_timeout_seconds = 2.0
    mock.face_match_threshold_high = 0.40
    mock.face_match_threshold_medium = 0.50
    mock.face_match_threshold_low = 0.60
    mock.face_min_detection_score = 0.7
    mock.face_embedding_model = "Facenet"
    mock.face_detector_backend = "opencv"
    mock.groq_api_key = "test_groq_key"
    mock.vlm_model = "test-vlm"
    mock.enforce_event_capacity = True
    mock.local_timezone = "UTC"

    # Patch at source and at use sites (modules import get_settings at load time)
    with patch("facepass.core.config.get_settings", return_value=mock), patch(
        "facepass.core.security.get_settings", return_value=mock
    ), patch("facepass.utils.datetime_utils.get_settings", return_value=mock):
        yield mock


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def event_repo():
    return InMemoryEventRepository()


@pytest.fixture
def ticket_repo():
    return InMemoryTicketRepository()


@pytest.fixture
def operator_session():
    return make_session(UserRole.OPERATOR)


@pytest.fixture
def manager_session():
    return make_session(UserRole.MANAGER)
