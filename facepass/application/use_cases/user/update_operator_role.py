# Standard library imports
import logging
from dataclasses import replace

# Local application imports
from ....domain.repositories.user_repository import UserRepository
from ....domain.models.session import OperatorSession
from ....domain.models.user import UserRole
from ....utils.datetime_utils import utc_now
from ...dto.user_dto import UserResponse
from ...services.account_guard import AccountGuard

logger = logging.getLogger(__name__)


class UpdateOperatorRoleUseCase:
    """Use case for granting or revoking a role (ADMIN only)"""

    def __init__(self, user_repository: UserRepository, account_guard: AccountGuard) -> None:
        self.user_repository = user_repository
        self.account_guard = account_guard

    async def execute(self, user_id: str, role: UserRole, operator: OperatorSession) -> UserResponse:
        """
        Raises:
            PermissionDeniedError / SessionExpiredError: If the operator is not an ADMIN
            OperatorNotFoundError: If no account has this ID
            ValueError: If the change would demote the last active ADMIN
        """
        operator.require(UserRole.ADMIN, utc_now())

        async with self.account_guard.changing(user_id) as user:
            if user.role == role:
                return UserResponse.from_domain(user)
            if role != UserRole.ADMIN:
                await self.account_guard.ensure_not_last_admin(user)
            saved = await self.user_repository.save(replace(user, role=role))

        logger.info(f"Account {user_id} role changed {user.role.value} -> {role.value} by {operator.user_id}")
        return UserResponse.from_domain(saved)
