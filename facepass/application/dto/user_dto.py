from typing import List

from pydantic import BaseModel, EmailStr, Field

from ...domain.models.user import User, UserRole


class UserResponse(BaseModel):
    """DTO for operator account response (no password)"""
    id: str
    full_name: str
    email: EmailStr
    role: UserRole
    is_active: bool = True

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id or "",
            full_name=user.full_name,
            email=user.email,
            role=user.role,
            is_active=user.is_active,
        )


class UserListResponse(BaseModel):
    total: int = 0
    items: List[UserResponse] = Field(default_factory=list)


class UserRoleUpdateRequest(BaseModel):
    """DTO for changing an account's role (ADMIN only)"""
    role: UserRole


class UserStatusUpdateRequest(BaseModel):
    """DTO for enabling or disabling an account (ADMIN only)"""
    is_active: bool
