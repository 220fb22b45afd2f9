from .database_provider import DatabaseProvider
from .repository_provider import RepositoryProvider
from .biometrics_provider import BiometricsProvider
from .auth_provider import AuthProvider
from .event_provider import EventProvider
from .ticket_provider import TicketProvider
from .gate_provider import GateProvider


__all__ = [
    "DatabaseProvider",
    "RepositoryProvider",
    "BiometricsProvider",
    "AuthProvider",
    "EventProvider",
    "TicketProvider",
    "GateProvider",
]
