# Standard library imports
from typing import Optional

# Local application imports
from ....domain.repositories.user_repository import UserRepository
from ....domain.models.session import OperatorSession
from ....domain.models.user import UserRole
from ....utils.datetime_utils import utc_now
from ...dto.user_dto import UserListResponse, UserResponse


class ListOperatorsUseCase:
    """Use case for listing operator accounts (ADMIN only)"""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, operator: OperatorSession, role: Optional[UserRole] = None) -> UserListResponse:
        operator.require(UserRole.ADMIN, utc_now())
        users = await self.user_repository.list_all(role)
        items = [UserResponse.from_domain(user) for user in users]
        return UserListResponse(total=len(items), items=items)
