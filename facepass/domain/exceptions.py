"""
Error taxonomy for ticket issuance, enrollment and gate admission.

Every error carries an ErrorKind code and a user-facing message. Gate
denials are built from these kinds; none of them ever resolves to "admit".
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Stable error codes surfaced to operators and audit logs."""

    CLAIM_NOT_FOUND = "ClaimNotFound"
    ALREADY_USED = "AlreadyUsed"
    NO_FACE_DETECTED = "NoFaceDetected"
    FACE_MISMATCH = "FaceMismatch"
    INCOMPATIBLE_DESCRIPTOR = "IncompatibleDescriptor"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"
    CAPACITY_EXCEEDED = "CapacityExceeded"
    DESCRIPTOR_INVALID = "DescriptorInvalid"
    INVALID_TRANSITION = "InvalidTransition"
    TICKET_NOT_FOUND = "TicketNotFound"
    EVENT_NOT_FOUND = "EventNotFound"
    EVENT_INACTIVE = "EventInactive"
    INVALID_TICKET_CLASS = "InvalidTicketClass"
    DUPLICATE_CLAIM = "DuplicateClaim"
    PERMISSION_DENIED = "PermissionDenied"
    SESSION_EXPIRED = "SessionExpired"
    OPERATOR_NOT_FOUND = "OperatorNotFound"


# Kinds that retrying cannot fix
DEFINITIVE_KINDS = frozenset({ErrorKind.ALREADY_USED, ErrorKind.CAPACITY_EXCEEDED})


# -----------------------------------------------------------------------------
# Base
# -----------------------------------------------------------------------------


class FacePassError(Exception):
    """Base exception for all FacePass domain errors."""

    kind: ErrorKind = ErrorKind.SERVICE_UNAVAILABLE
    default_user_message: str = "An error occurred. Please try again."

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or self.default_user_message
        self.details = details or {}

    @property
    def recoverable(self) -> bool:
        return self.kind not in DEFINITIVE_KINDS


# -----------------------------------------------------------------------------
# Biometric
# -----------------------------------------------------------------------------


class IncompatibleDescriptorError(FacePassError):
    """Raised when two descriptors differ in length or extraction method."""

    kind = ErrorKind.INCOMPATIBLE_DESCRIPTOR
    default_user_message = "Stored face data cannot be compared with this capture."


class NoFaceDetectedError(FacePassError):
    """Raised when a capture contains no usable face."""

    kind = ErrorKind.NO_FACE_DETECTED
    default_user_message = "No face detected. Position your face in front of the camera."


class FaceMismatchError(FacePassError):
    kind = ErrorKind.FACE_MISMATCH
    default_user_message = "Face does not match the ticket holder."


class DescriptorInvalidError(FacePassError):
    """Raised when an enrollment capture is rejected (no face, low quality, already enrolled)."""

    kind = ErrorKind.DESCRIPTOR_INVALID
    default_user_message = "Face capture rejected. Improve lighting and try again."


class ServiceUnavailableError(FacePassError):
    """Raised when the face verification backend times out, is unreachable or answers garbage."""

    kind = ErrorKind.SERVICE_UNAVAILABLE
    default_user_message = "Face verification service unavailable. Entry denied, please retry."


# -----------------------------------------------------------------------------
# Tickets and events
# -----------------------------------------------------------------------------


class ClaimNotFoundError(FacePassError):
    kind = ErrorKind.CLAIM_NOT_FOUND
    default_user_message = "No valid ticket found for this identity at this event."


class AlreadyUsedError(FacePassError):
    kind = ErrorKind.ALREADY_USED
    default_user_message = "Ticket already used. Re-entry is not allowed."


class InvalidStateTransitionError(FacePassError):
    """Raised when attempting a ticket status change outside the transition graph."""

    kind = ErrorKind.INVALID_TRANSITION
    default_user_message = "Ticket is not in a valid state for this operation."


class CapacityExceededError(FacePassError):
    kind = ErrorKind.CAPACITY_EXCEEDED
    default_user_message = "Event is sold out."


class TicketNotFoundError(FacePassError):
    kind = ErrorKind.TICKET_NOT_FOUND
    default_user_message = "Ticket not found."


class EventNotFoundError(FacePassError):
    kind = ErrorKind.EVENT_NOT_FOUND
    default_user_message = "Event not found."


class EventInactiveError(FacePassError):
    kind = ErrorKind.EVENT_INACTIVE
    default_user_message = "Event is not open for registration."


class InvalidTicketClassError(FacePassError):
    kind = ErrorKind.INVALID_TICKET_CLASS
    default_user_message = "Ticket class not available for this event."


class DuplicateClaimError(FacePassError):
    """Raised when the holder already has a non-used ticket for the event."""

    kind = ErrorKind.DUPLICATE_CLAIM
    default_user_message = "A ticket for this email already exists for this event."


# -----------------------------------------------------------------------------
# Operators
# -----------------------------------------------------------------------------


class PermissionDeniedError(FacePassError):
    kind = ErrorKind.PERMISSION_DENIED
    default_user_message = "You do not have permission to perform this action."


class SessionExpiredError(FacePassError):
    kind = ErrorKind.SESSION_EXPIRED
    default_user_message = "Session expired. Please log in again."


class OperatorNotFoundError(FacePassError):
    kind = ErrorKind.OPERATOR_NOT_FOUND
    default_user_message = "Account not found."
