# Local application imports
from .base_container import BaseContainer
from .providers import (
    AuthProvider,
    BiometricsProvider,
    DatabaseProvider,
    EventProvider,
    GateProvider,
    RepositoryProvider,
    TicketProvider,
)


class DIContainer(BaseContainer):
    """
    Main dependency injection container.
    Composes all providers in the correct order.

    Registration order is important:
    1. Database connections (DatabaseProvider)
    2. Repositories (RepositoryProvider) - depends on database
    3. Face verifier (BiometricsProvider) - selected from settings
    4. Domain services and use cases (Event, Ticket, Gate, Auth providers)
    """

    def __init__(self) -> None:
        super().__init__()
        self.setup()

    def setup(self) -> None:
        """
        Setup dependency registrations by composing all providers.
        Order matters: database → repositories → biometrics → services → use cases
        """
        DatabaseProvider.register(self)

        RepositoryProvider.register(self)

        BiometricsProvider.register(self)

        # EventProvider registers AdmissionController, which TicketProvider consumes
        EventProvider.register(self)
        AuthProvider.register(self)
        TicketProvider.register(self)
        GateProvider.register(self)


# Global container instance (singleton pattern)
_container: DIContainer | None = None


def get_container() -> DIContainer:
    """
    Get the global DI container instance (singleton pattern)

    Returns:
        DIContainer instance with all dependencies registered
    """
    global _container
    if _container is None:
        _container = DIContainer()
    return _container
