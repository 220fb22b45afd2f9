# External package imports
from fastapi import HTTPException, status

# Local application imports
from ...domain.exceptions import ErrorKind, FacePassError


_STATUS_BY_KIND = {
    ErrorKind.CLAIM_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.TICKET_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.OPERATOR_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ALREADY_USED: status.HTTP_409_CONFLICT,
    ErrorKind.CAPACITY_EXCEEDED: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorKind.DUPLICATE_CLAIM: status.HTTP_409_CONFLICT,
    ErrorKind.EVENT_INACTIVE: status.HTTP_409_CONFLICT,
    ErrorKind.DESCRIPTOR_INVALID: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.NO_FACE_DETECTED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.INVALID_TICKET_CLASS: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.INCOMPATIBLE_DESCRIPTOR: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.FACE_MISMATCH: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.SERVICE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.SESSION_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
}


def to_http_exception(exception: FacePassError) -> HTTPException:
    """Map a domain error to an HTTPException carrying its kind and user message"""
    return HTTPException(
        status_code=_STATUS_BY_KIND.get(exception.kind, status.HTTP_400_BAD_REQUEST),
        detail={
            "kind": exception.kind.value,
            "message": exception.user_message,
            "recoverable": exception.recoverable,
        },
    )
