# Standard library imports
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

# Local application imports
from ..exceptions import PermissionDeniedError, SessionExpiredError
from .user import UserRole, has_permission


@dataclass(frozen=True)
class OperatorSession:
    """
    Explicit authenticated operator session.

    Passed into every privileged operation and validated there; there is no
    ambient "current user".
    """
    token: str
    user_id: str
    email: str
    role: UserRole
    issued_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def require(self, role: UserRole, now: Optional[datetime] = None) -> None:
        """
        Raises:
            SessionExpiredError: If the session TTL has elapsed
            PermissionDeniedError: If the operator's rank is below ``role``
        """
        if now is not None and self.is_expired(now):
            raise SessionExpiredError(
                f"Session for {self.user_id} expired at {self.expires_at.isoformat()}"
            )
        if not has_permission(self.role, role):
            raise PermissionDeniedError(
                f"Role {self.role.value} lacks {role.value} permission",
                details={"required": role.value, "actual": self.role.value},
            )
