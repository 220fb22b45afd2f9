# Standard library imports
from datetime import datetime, timezone
from typing import Optional

# Local application imports
from ....domain.repositories.user_repository import UserRepository
from ....domain.models.session import OperatorSession
from ....core.security import decode_jwt_token


class GetCurrentOperatorUseCase:
    """Use case for turning a session token into a validated OperatorSession"""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, token: str) -> OperatorSession:
        """
        Resolve the operator session for a token

        The role comes from the stored account, not from the token claim, so
        a demotion takes effect on the next request.

        Raises:
            ValueError: If the token is invalid or expired, or the account is missing or disabled
        """
        try:
            payload = decode_jwt_token(token)
        except ValueError as exception:
            raise ValueError(f"Invalid or expired token: {str(exception)}")

        user_id: Optional[str] = payload.get("sub")
        if not user_id:
            raise ValueError("Invalid authentication payload: missing user ID")

        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            raise ValueError("User not found")
        if not user.is_active:
            raise ValueError("Account disabled")

        return OperatorSession(
            token=token,
            user_id=user.id or user_id,
            email=user.email,
            role=user.role,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
