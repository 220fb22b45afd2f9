# Standard library imports
import logging
from typing import Optional

# Local application imports
from ....domain.exceptions import PermissionDeniedError
from ....domain.repositories.user_repository import UserRepository
from ....domain.models.session import OperatorSession
from ....domain.models.user import User, UserRole
from ....core.security import hash_password
from ....utils.datetime_utils import utc_now
from ...dto.auth_dto import OperatorRegistrationRequest
from ...dto.user_dto import UserResponse

logger = logging.getLogger(__name__)


class RegisterOperatorUseCase:
    """Use case for registering a new operator account"""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(
        self,
        request: OperatorRegistrationRequest,
        actor: Optional[OperatorSession] = None,
    ) -> UserResponse:
        """
        Register a new account

        The very first account becomes ADMIN. After that, self-registration
        yields USER accounts; any higher role must be granted by an ADMIN
        session.

        Raises:
            ValueError: If an account with this email already exists
            PermissionDeniedError: If a role above USER is requested without an ADMIN actor
        """
        existing_user = await self.user_repository.find_by_email(request.email)
        if existing_user is not None:
            raise ValueError("User with this email already exists")

        role = request.role
        if await self.user_repository.count() == 0:
            role = UserRole.ADMIN
            logger.info(f"Bootstrapping first account {request.email} as ADMIN")
        elif role is not UserRole.USER:
            if actor is None:
                raise PermissionDeniedError(
                    f"Role {role.value} requires an administrator",
                    details={"required": UserRole.ADMIN.value},
                )
            actor.require(UserRole.ADMIN, utc_now())

        new_user = User(
            id=None,
            full_name=request.full_name,
            email=request.email.lower(),
            hashed_password=hash_password(request.password),
            role=role,
        )
        saved_user = await self.user_repository.save(new_user)

        return UserResponse.from_domain(saved_user)
