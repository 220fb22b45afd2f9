"""
Fixtures for API tests: the real FastAPI app wired to in-memory repositories.

Providers register the real use cases on top of the fakes, so requests run
through controllers, dependencies, use cases and error mapping unchanged.
"""
from contextlib import ExitStack
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from facepass.di.base_container import BaseContainer
from facepass.di.providers import AuthProvider, EventProvider, GateProvider, TicketProvider
from facepass.domain.repositories.event_repository import EventRepository
from facepass.domain.repositories.ticket_repository import TicketRepository
from facepass.domain.repositories.user_repository import UserRepository
from facepass.domain.services.face_verifier import FaceVerifier
from tests.fakes import InMemoryEventRepository, InMemoryTicketRepository, InMemoryUserRepository, StubFaceVerifier
from tests.integration.helpers import register_and_login

GET_CONTAINER_TARGETS = (
    "facepass.main.get_container",
    "facepass.api.v1.dependencies.get_container",
    "facepass.api.v1.auth_controller.get_container",
    "facepass.api.v1.users_controller.get_container",
    "facepass.api.v1.event_controller.get_container",
    "facepass.api.v1.ticket_controller.get_container",
    "facepass.api.v1.gate_controller.get_container",
    "facepass.api.v1.notifications_controller.get_container",
)


@pytest.fixture
def face_verifier():
    return StubFaceVerifier()


@pytest.fixture
def app_container(face_verifier):
    container = BaseContainer()
    container.register_singleton(UserRepository, InMemoryUserRepository())
    container.register_singleton(EventRepository, InMemoryEventRepository())
    container.register_singleton(TicketRepository, InMemoryTicketRepository())
    container.register_singleton(FaceVerifier, face_verifier)
    EventProvider.register(container)
    AuthProvider.register(container)
    TicketProvider.register(container)
    GateProvider.register(container)
    return container


@pytest.fixture
def client(app_container, mock_settings):
    """TestClient over the real app; the change feed fails to start without collections and stays off."""
    from facepass.main import app

    with ExitStack() as stack:
        for target in GET_CONTAINER_TARGETS:
            stack.enter_context(patch(target, return_value=app_container))
        with TestClient(app) as test_client:
            yield test_client


@pytest.fixture
def admin_headers(client):
    return register_and_login(client)
