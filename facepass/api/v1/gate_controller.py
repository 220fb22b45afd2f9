# External package imports
from fastapi import APIRouter, Depends

# Local application imports
from ...application.dto.gate_dto import GateVerificationRequest, GateVerificationResponse
from ...application.use_cases.gate.verify_at_gate import VerifyAtGateUseCase
from ...domain.exceptions import FacePassError
from ...domain.models.session import OperatorSession
from ...domain.models.user import UserRole
from ...di.container import get_container
from .dependencies import require_role
from .error_mapping import to_http_exception


router = APIRouter(tags=["gate"])


@router.post("/verify", response_model=GateVerificationResponse)
async def verify_at_gate(
    request: GateVerificationRequest,
    operator: OperatorSession = Depends(require_role(UserRole.OPERATOR)),
) -> GateVerificationResponse:
    """
    Run one gate attempt

    Denials are regular 200 responses with ``granted: false`` and the denial
    kind; only authentication problems produce an error status.
    """
    container = get_container()
    try:
        result = await container.get(VerifyAtGateUseCase).execute(
            event_id=request.event_id,
            claim_email=request.email,
            capture=request.image,
            operator=operator,
        )
    except FacePassError as exception:
        raise to_http_exception(exception)
    return GateVerificationResponse.from_result(result)
