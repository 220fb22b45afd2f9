from abc import ABC, abstractmethod
from typing import List, Optional
from ..models.user import User, UserRole


class UserRepository(ABC):
    """Repository interface - defines contract for operator account data access"""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find user by email address"""
        pass

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        """Find user by ID"""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save user (create or update)"""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Number of registered accounts"""
        pass

    @abstractmethod
    async def list_all(self, role: Optional[UserRole] = None) -> List[User]:
        """List accounts, newest first, optionally only those holding ``role``"""
        pass

    @abstractmethod
    async def count_active_with_role(self, role: UserRole) -> int:
        """Number of enabled accounts holding exactly ``role``"""
        pass
