# External package imports
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# Local application imports
from ...application.dto.auth_dto import OperatorRegistrationRequest, OperatorLoginRequest, TokenResponse
from ...application.dto.user_dto import UserResponse
from ...application.use_cases.auth.register_operator import RegisterOperatorUseCase
from ...application.use_cases.auth.login_operator import LoginOperatorUseCase
from ...application.use_cases.auth.get_current_operator import GetCurrentOperatorUseCase
from ...domain.exceptions import FacePassError
from ...domain.models.session import OperatorSession
from ...domain.repositories.user_repository import UserRepository
from ...di.container import get_container
from .dependencies import get_current_operator
from .error_mapping import to_http_exception


router = APIRouter(tags=["authentication"])

optional_bearer = HTTPBearer(auto_error=False)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_operator(
    request: OperatorRegistrationRequest,
    credentials: HTTPAuthorizationCredentials | None = Depends(optional_bearer),
) -> UserResponse:
    """
    Register a new account

    Anonymous callers get a USER account (the first account ever becomes
    ADMIN). Granting a higher role requires an ADMIN bearer token.
    """
    container = get_container()
    register_use_case = container.get(RegisterOperatorUseCase)

    actor = None
    if credentials is not None:
        try:
            actor = await container.get(GetCurrentOperatorUseCase).execute(credentials.credentials)
        except ValueError as exception:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=str(exception)
            )

    try:
        return await register_use_case.execute(request, actor=actor)
    except FacePassError as exception:
        raise to_http_exception(exception)
    except ValueError as exception:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exception)
        )


@router.post("/login", response_model=TokenResponse)
async def login_operator(request: OperatorLoginRequest) -> TokenResponse:
    """
    Authenticate and get a session token
    """
    container = get_container()
    login_use_case = container.get(LoginOperatorUseCase)

    token_response = await login_use_case.execute(request)
    if token_response is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )
    return token_response


@router.get("/me", response_model=UserResponse)
async def get_me(operator: OperatorSession = Depends(get_current_operator)) -> UserResponse:
    """
    Get the account behind the current session
    """
    container = get_container()
    user = await container.get(UserRepository).find_by_id(operator.user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )
    return UserResponse.from_domain(user)
