"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. Every exception carries an
ErrorKind so the operation boundary can classify it without
inspecting the concrete class.
"""
from enum import Enum


class ErrorKind(Enum):
    """Classification of operation failures."""

    INVALID_INPUT = "InvalidInput"
    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    EXHAUSTED = "Exhausted"
    INTERNAL = "Internal"

    def __str__(self) -> str:
        return self.value


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class InvalidInputError(DomainException):
    """Raised when a request field is missing or malformed."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str = "Invalid input", code: str = "INVALID_INPUT"):
        super().__init__(message, code=code)


class InvalidLicenseKeyError(InvalidInputError):
    """Raised when a license key does not match the expected format."""

    def __init__(self, message: str = "Invalid license key format"):
        super().__init__(message, code="INVALID_LICENSE_KEY")


class InvalidExpiryDateError(InvalidInputError):
    """Raised when an expiry date cannot be parsed."""

    def __init__(self, message: str = "Invalid expiry date format"):
        super().__init__(message, code="INVALID_EXPIRY_DATE")


class UnauthorizedError(DomainException):
    """Raised when the caller has no usable identity."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="UNAUTHORIZED")


class ForbiddenError(DomainException):
    """Raised when the caller's role does not grant the capability."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, message: str = "SuperAdmin access required"):
        super().__init__(message, code="FORBIDDEN")


class NotFoundError(DomainException):
    """Base exception for missing entities."""

    kind = ErrorKind.NOT_FOUND


class LicenseNotFoundError(NotFoundError):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class AdminNotFoundError(NotFoundError):
    """Raised when an admin or user is not found."""

    def __init__(self, message: str = "Admin not found"):
        super().__init__(message, code="ADMIN_NOT_FOUND")


class ConflictError(DomainException):
    """Base exception for uniqueness and state-precondition violations."""

    kind = ErrorKind.CONFLICT


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when an admin with the same email already exists."""

    def __init__(self, message: str = "Admin already exists"):
        super().__init__(message, code="EMAIL_ALREADY_REGISTERED")


class LicenseKeyConflictError(ConflictError):
    """Raised by stores when a license key violates the unique constraint."""

    def __init__(self, message: str = "License key already exists"):
        super().__init__(message, code="LICENSE_KEY_CONFLICT")


class LicenseBoundElsewhereError(ConflictError):
    """Raised when a license is already assigned to another admin."""

    def __init__(self, message: str = "This license is assigned to another admin"):
        super().__init__(message, code="LICENSE_ASSIGNED_ELSEWHERE")


class ActiveLicenseExistsError(ConflictError):
    """Raised when the admin already holds an active license."""

    def __init__(self, message: str = "You already have an active license"):
        super().__init__(message, code="ACTIVE_LICENSE_EXISTS")


class LicenseExpiredError(ConflictError):
    """Raised when a license has expired and only a new expiry date can bring it back."""

    def __init__(self, message: str = "This license has expired"):
        super().__init__(message, code="LICENSE_EXPIRED")


class LicenseKeyExhaustedError(DomainException):
    """Raised when no unique license key was found within the retry budget."""

    kind = ErrorKind.EXHAUSTED

    def __init__(self, message: str = "Failed to generate unique license key"):
        super().__init__(message, code="LICENSE_KEY_EXHAUSTED")
