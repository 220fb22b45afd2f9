# Standard library imports
from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Local application imports
from ..exceptions import ErrorKind
from .face import ConfidenceTier
from .ticket import Ticket


class GateAttemptState(str, Enum):
    AWAITING_CLAIM = "AWAITING_CLAIM"
    CLAIM_RESOLVED = "CLAIM_RESOLVED"
    COMPARING = "COMPARING"
    DECIDED = "DECIDED"


@dataclass(frozen=True)
class VerificationResult:
    """
    Ephemeral outcome of one gate attempt. Never persisted.

    ``kind`` is None only for a grant.
    """
    granted: bool
    message: str
    kind: Optional[ErrorKind] = None
    tier: Optional[ConfidenceTier] = None
    distance: Optional[float] = None
    ticket: Optional[Ticket] = None
    state: GateAttemptState = GateAttemptState.DECIDED

    @property
    def audit(self) -> str:
        tier = self.tier.value if self.tier else "N/A"
        outcome = "GRANTED" if self.granted else f"DENIED:{self.kind.value if self.kind else 'Unknown'}"
        return f"{outcome} confidence={tier}"
