from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    """Operator roles, totally ordered by rank."""

    USER = "USER"
    OPERATOR = "OPERATOR"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]


_ROLE_RANK = {
    UserRole.USER: 1,
    UserRole.OPERATOR: 2,
    UserRole.MANAGER: 3,
    UserRole.ADMIN: 4,
}


def has_permission(actual: UserRole, required: UserRole) -> bool:
    """Higher rank implies every lower-rank permission."""
    return actual.rank >= required.rank


@dataclass
class User:
    """Pure domain model for an operator account - no external dependencies"""
    id: Optional[str]
    full_name: str
    email: str
    hashed_password: str
    role: UserRole = UserRole.USER
    is_active: bool = True

    def __post_init__(self):
        """Business validations"""
        if not self.full_name or len(self.full_name.strip()) < 2:
            raise ValueError("Full name must be at least 2 characters")
        if not self.email or "@" not in self.email:
            raise ValueError("Invalid email format")
        if not self.hashed_password:
            raise ValueError("Password hash is required")
