# Standard library imports
from typing import Optional

# External package imports
from fastapi import APIRouter, Depends, HTTPException, Query, status

# Local application imports
from ...application.dto.user_dto import (
    UserListResponse,
    UserResponse,
    UserRoleUpdateRequest,
    UserStatusUpdateRequest,
)
from ...application.use_cases.user.list_operators import ListOperatorsUseCase
from ...application.use_cases.user.update_operator_role import UpdateOperatorRoleUseCase
from ...application.use_cases.user.set_operator_active import SetOperatorActiveUseCase
from ...domain.exceptions import FacePassError
from ...domain.models.session import OperatorSession
from ...domain.models.user import UserRole
from ...di.container import get_container
from .dependencies import require_role
from .error_mapping import to_http_exception


router = APIRouter(tags=["users"])


@router.get("", response_model=UserListResponse)
async def list_operators(
    role: Optional[UserRole] = Query(default=None),
    operator: OperatorSession = Depends(require_role(UserRole.ADMIN)),
) -> UserListResponse:
    """List accounts, optionally filtered by role (ADMIN only)"""
    container = get_container()
    try:
        return await container.get(ListOperatorsUseCase).execute(operator, role=role)
    except FacePassError as exception:
        raise to_http_exception(exception)


@router.patch("/{user_id}/role", response_model=UserResponse)
async def update_operator_role(
    user_id: str,
    request: UserRoleUpdateRequest,
    operator: OperatorSession = Depends(require_role(UserRole.ADMIN)),
) -> UserResponse:
    """Change an account's role; the last active ADMIN cannot be demoted"""
    container = get_container()
    try:
        return await container.get(UpdateOperatorRoleUseCase).execute(user_id, request.role, operator)
    except FacePassError as exception:
        raise to_http_exception(exception)
    except ValueError as exception:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exception)
        )


@router.patch("/{user_id}/status", response_model=UserResponse)
async def set_operator_active(
    user_id: str,
    request: UserStatusUpdateRequest,
    operator: OperatorSession = Depends(require_role(UserRole.ADMIN)),
) -> UserResponse:
    """Enable or disable an account; the last active ADMIN cannot be disabled"""
    container = get_container()
    try:
        return await container.get(SetOperatorActiveUseCase).execute(user_id, request.is_active, operator)
    except FacePassError as exception:
        raise to_http_exception(exception)
    except ValueError as exception:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exception)
        )
