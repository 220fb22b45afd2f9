# Standard library imports
from datetime import datetime, timezone
from typing import Optional

# Local application imports
from ....domain.repositories.user_repository import UserRepository
from ....domain.constants import UserFields
from ....core.security import verify_password, create_jwt_token, decode_jwt_token
from ...dto.auth_dto import OperatorLoginRequest, TokenResponse


class LoginOperatorUseCase:
    """Use case for authenticating an operator and issuing a session token"""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, request: OperatorLoginRequest) -> Optional[TokenResponse]:
        """
        Authenticate and issue a session token

        Returns:
            TokenResponse if authentication successful, None otherwise
        """
        user = await self.user_repository.find_by_email(request.email)
        if user is None or not user.is_active:
            return None

        if not verify_password(request.password, user.hashed_password):
            return None

        token = create_jwt_token({
            "sub": user.id or "",  # JWT standard claim (subject)
            UserFields.EMAIL: user.email,
            UserFields.ROLE: user.role.value,
        })
        claims = decode_jwt_token(token)

        return TokenResponse(
            access_token=token,
            role=user.role,
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )
