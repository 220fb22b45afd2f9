from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from ...domain.models.user import UserRole


class OperatorRegistrationRequest(BaseModel):
    """DTO for operator account registration"""
    full_name: str = Field(min_length=2, max_length=200)
    email: EmailStr
    password: str = Field(min_length=8, max_length=256)
    role: UserRole = UserRole.USER


class OperatorLoginRequest(BaseModel):
    """DTO for operator login request"""
    email: EmailStr
    password: str = Field(min_length=8, max_length=256)


class TokenResponse(BaseModel):
    """DTO for session token response"""
    access_token: str
    token_type: str = "bearer"
    role: UserRole
    expires_at: Optional[datetime] = None
