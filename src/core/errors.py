"""
Custom exceptions and error handling for Plann.er.

Defines application-specific exceptions with error codes for consistent
error handling across Lambda functions and client communication.

Usage:
    from core.errors import NotFoundError, ErrorCode

    raise NotFoundError("Trip not found", code=ErrorCode.TRIP_NOT_FOUND)
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for client-facing error messages."""

    # Input errors
    INVALID_REQUEST = "INVALID_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_SCHEDULE = "INVALID_SCHEDULE"

    # Lookup errors
    TRIP_NOT_FOUND = "TRIP_NOT_FOUND"
    PARTICIPANT_NOT_FOUND = "PARTICIPANT_NOT_FOUND"

    # Delivery errors
    NOTIFICATION_FAILED = "NOTIFICATION_FAILED"

    # System errors
    STORAGE_FAILED = "STORAGE_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_REQUEST: "Invalid request format. Please try again.",
    ErrorCode.VALIDATION_ERROR: "Your request contains invalid information. Please check and try again.",
    ErrorCode.INVALID_SCHEDULE: "The trip dates are invalid. Please check the start and end dates.",
    ErrorCode.TRIP_NOT_FOUND: "Trip not found.",
    ErrorCode.PARTICIPANT_NOT_FOUND: "Participant not found.",
    ErrorCode.NOTIFICATION_FAILED: "We could not send the confirmation email.",
    ErrorCode.STORAGE_FAILED: "We could not save your changes. Please try again.",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred. Please try again.",
}


class PlannerError(Exception):
    """Base exception for all Plann.er errors."""

    http_status = 500

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR):
        self.message = message
        self.code = code
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return USER_MESSAGES.get(self.code, USER_MESSAGES[ErrorCode.INTERNAL_ERROR])


class ClientInputError(PlannerError):
    """Malformed or semantically invalid input. The message is safe to show the caller."""

    http_status = 400

    def __init__(self, message: str, code: ErrorCode = ErrorCode.VALIDATION_ERROR):
        super().__init__(message, code=code)


class InvalidScheduleError(ClientInputError):
    """Trip start or end date violates the schedule rules."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_SCHEDULE):
        super().__init__(message, code=code)


class NotFoundError(PlannerError):
    """Referenced trip or participant does not exist."""

    http_status = 404

    def __init__(self, message: str, code: ErrorCode = ErrorCode.TRIP_NOT_FOUND):
        super().__init__(message, code=code)


class NotificationDeliveryError(PlannerError):
    """A single recipient's notification could not be delivered."""

    http_status = 502

    def __init__(self, message: str, code: ErrorCode = ErrorCode.NOTIFICATION_FAILED):
        super().__init__(message, code=code)


class StorageError(PlannerError):
    """Repository read or write failed."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.STORAGE_FAILED):
        super().__init__(message, code=code)
