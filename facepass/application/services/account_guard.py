"""Serialized role and status changes that keep at least one enabled ADMIN"""

# Standard library imports
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

# Local application imports
from ...domain.exceptions import OperatorNotFoundError
from ...domain.models.user import User, UserRole
from ...domain.repositories.user_repository import UserRepository


class AccountGuard:
    """
    Loads accounts for modification and refuses to remove the last ADMIN.

    One instance is shared by every account-changing use case. Its lock makes
    the count-then-save sequence atomic within this process, so two
    concurrent demotions cannot both see a second ADMIN.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def changing(self, user_id: str) -> AsyncIterator[User]:
        """
        Hold the lock and yield the current account

        Raises:
            OperatorNotFoundError: If no account has this ID
        """
        async with self._lock:
            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                raise OperatorNotFoundError(
                    f"Account {user_id} not found",
                    details={"user_id": user_id},
                )
            yield user

    async def ensure_not_last_admin(self, target: User) -> None:
        """
        Call inside ``changing`` when the change takes ``target`` out of the
        enabled ADMIN set.

        Raises:
            ValueError: If ``target`` is the only enabled ADMIN
        """
        if target.role != UserRole.ADMIN or not target.is_active:
            return
        if await self.user_repository.count_active_with_role(UserRole.ADMIN) <= 1:
            raise ValueError("Cannot remove the last active ADMIN account")
