from typing import TYPE_CHECKING
from ...domain.repositories.user_repository import UserRepository
from ...application.use_cases.auth.register_operator import RegisterOperatorUseCase
from ...application.use_cases.auth.login_operator import LoginOperatorUseCase
from ...application.use_cases.auth.get_current_operator import GetCurrentOperatorUseCase
from ...application.services.account_guard import AccountGuard
from ...application.use_cases.user.list_operators import ListOperatorsUseCase
from ...application.use_cases.user.update_operator_role import UpdateOperatorRoleUseCase
from ...application.use_cases.user.set_operator_active import SetOperatorActiveUseCase

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class AuthProvider:
    """Authentication and account administration use case provider"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all authentication use cases.
        Use cases are created on-demand via factories.
        """
        container.register_factory(
            RegisterOperatorUseCase,
            lambda: RegisterOperatorUseCase(
                user_repository=container.get(UserRepository)
            )
        )

        container.register_factory(
            LoginOperatorUseCase,
            lambda: LoginOperatorUseCase(
                user_repository=container.get(UserRepository)
            )
        )

        container.register_factory(
            GetCurrentOperatorUseCase,
            lambda: GetCurrentOperatorUseCase(
                user_repository=container.get(UserRepository)
            )
        )

        account_guard = AccountGuard(user_repository=container.get(UserRepository))
        container.register_singleton(AccountGuard, account_guard)

        container.register_factory(
            ListOperatorsUseCase,
            lambda: ListOperatorsUseCase(
                user_repository=container.get(UserRepository)
            )
        )

        container.register_factory(
            UpdateOperatorRoleUseCase,
            lambda: UpdateOperatorRoleUseCase(
                user_repository=container.get(UserRepository),
                account_guard=container.get(AccountGuard),
            )
        )

        container.register_factory(
            SetOperatorActiveUseCase,
            lambda: SetOperatorActiveUseCase(
                user_repository=container.get(UserRepository),
                account_guard=container.get(AccountGuard),
            )
        )
