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


class SetOperatorActiveUseCase:
    """Use case for enabling or disabling an account (ADMIN only)"""

    def __init__(self, user_repository: UserRepository, account_guard: AccountGuard) -> None:
        self.user_repository = user_repository
        self.account_guard = account_guard

    async def execute(self, user_id: str, is_active: bool, operator: OperatorSession) -> UserResponse:
        """
        A disabled account can no longer resolve a session, so its
        outstanding tokens stop working on the next request.

        Raises:
            PermissionDeniedError / SessionExpiredError: If the operator is not an ADMIN
            OperatorNotFoundError: If no account has this ID
            ValueError: If the change would disable the last active ADMIN
        """
        operator.require(UserRole.ADMIN, utc_now())

        async with self.account_guard.changing(user_id) as user:
            if user.is_active == is_active:
                return UserResponse.from_domain(user)
            if not is_active:
                await self.account_guard.ensure_not_last_admin(user)
            saved = await self.user_repository.save(replace(user, is_active=is_active))

        state = "enabled" if is_active else "disabled"
        logger.info(f"Account {user_id} {state} by {operator.user_id}")
        return UserResponse.from_domain(saved)
