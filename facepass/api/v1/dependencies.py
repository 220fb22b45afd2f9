# Standard library imports
from typing import Callable

# External package imports
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# Local application imports
from ...application.use_cases.auth.get_current_operator import GetCurrentOperatorUseCase
from ...domain.exceptions import FacePassError
from ...domain.models.session import OperatorSession
from ...domain.models.user import UserRole
from ...di.container import get_container
from ...utils.datetime_utils import utc_now
from .error_mapping import to_http_exception


security_scheme = HTTPBearer(auto_error=True)


async def get_current_operator(
    credentials: HTTPAuthorizationCredentials = Depends(security_scheme),
) -> OperatorSession:
    """
    FastAPI dependency resolving the bearer token into an OperatorSession

    Raises:
        HTTPException: 401 if the token is invalid, expired, or the account is gone
    """
    token: str = credentials.credentials

    container = get_container()
    get_current_operator_use_case = container.get(GetCurrentOperatorUseCase)

    try:
        return await get_current_operator_use_case.execute(token)
    except ValueError as exception:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exception)
        )


def require_role(role: UserRole) -> Callable:
    """Dependency factory: the session must rank at least ``role``"""

    async def dependency(operator: OperatorSession = Depends(get_current_operator)) -> OperatorSession:
        try:
            operator.require(role, utc_now())
        except FacePassError as exception:
            raise to_http_exception(exception)
        return operator

    return dependency
