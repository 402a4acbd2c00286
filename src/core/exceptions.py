"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    CLINIC_NOT_FOUND = "CLINIC_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CLINIC_REFERENCE = "INVALID_CLINIC_REFERENCE"

    # Conflict errors (409)
    DUPLICATE_PROFILE = "DUPLICATE_PROFILE"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class DuplicateProfileError(AppException):
    """Saving the profile would create an exact duplicate."""

    def __init__(
        self,
        message: str = "A similar profile already exists. Please check for duplicates.",
    ) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_PROFILE,
            message=message,
            status_code=409,
        )


class ProfileNotFoundError(AppException):
    """Vet or clinic profile not found."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {profile_id}",
            status_code=404,
            details={"profile_id": profile_id},
        )


class ClinicNotFoundError(AppException):
    """Clinic profile not found."""

    def __init__(self, clinic_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.CLINIC_NOT_FOUND,
            message=f"Clinic not found: {clinic_id}",
            status_code=404,
            details={"clinic_id": clinic_id},
        )


class StorageCorruptedError(AppException):
    """A storage slot holds data that cannot be decoded."""

    def __init__(self, slot: str, reason: str) -> None:
        super().__init__(
            error_code=ErrorCode.STORAGE_ERROR,
            message=f"Stored {slot} could not be read: {reason}",
            status_code=500,
            details={"slot": slot},
        )


class InvalidClinicReferenceError(AppException):
    """A practitioner points at a profile that is not a stored clinic."""

    def __init__(self, clinic_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_CLINIC_REFERENCE,
            message=f"clinic_id does not reference an existing clinic: {clinic_id}",
            status_code=400,
            details={"clinic_id": clinic_id},
        )
