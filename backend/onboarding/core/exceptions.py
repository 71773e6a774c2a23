"""Custom exceptions for application-specific error handling."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple


class OnboardingException(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 400,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        self.headers = headers
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the `{"data": ...}` envelope used by API responses."""
        return {
            "data": {
                "message": self.message,
                "error_code": self.error_code,
                **self.details,
            }
        }


class NotFoundError(OnboardingException):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "not_found", *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code="NOT_FOUND", details=details, status_code=404)


class BadRequestError(OnboardingException):
    """Raised when request is invalid."""

    def __init__(
        self,
        message: str = "bad_request",
        *,
        error_code: str = "BAD_REQUEST",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=error_code, details=details, status_code=400)


class RateLimitExceeded(OnboardingException):
    """Raised when a client exceeds rate limits."""

    def __init__(self, *, retry_after: int, limit: int, window_seconds: int):
        headers = {
            "Retry-After": str(retry_after),
            "X-RateLimit-Limit": str(limit),
            "X-RateLimit-Window": str(window_seconds),
        }
        super().__init__(
            "rate_limit_exceeded",
            error_code="RATE_LIMIT",
            details={"retry_after": retry_after, "limit": limit, "window_seconds": window_seconds},
            status_code=429,
            headers=headers,
        )


# ===== VALIDATION EXCEPTIONS =====


class ValidationException(OnboardingException):
    """Base exception for validation errors."""


class FieldValidationError(ValidationException):
    """Raised when one or more submitted fields fail validation."""

    def __init__(self, errors: List[Tuple[str, str]]):
        self.errors = list(errors)
        super().__init__(
            "Field validation failed.",
            error_code="FIELD_VALIDATION_FAILED",
            details={"fields": [field for field, _ in self.errors]},
            status_code=400,
        )


class DuplicateSignupError(ValidationException):
    """Raised when a signup collides with an existing contact email or dealership domain."""

    MESSAGES = {
        "contact_email": ("Contact email already exists in system.", "EMAIL_EXISTS"),
        "dealership_domain": ("Dealership domain already exists in system.", "DOMAIN_EXISTS"),
    }

    def __init__(self, field: str):
        self.field = field
        message, error_code = self.MESSAGES[field]
        super().__init__(message, error_code=error_code, status_code=400)


class InvalidConfigurationError(ValidationException):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, setting: Optional[str] = None):
        details = {"setting": setting} if setting else {}
        super().__init__(message, error_code="INVALID_CONFIG", details=details, status_code=500)


# ===== VERIFICATION EXCEPTIONS =====


class VerificationException(OnboardingException):
    """Base exception for email verification failures."""


class MalformedLinkError(VerificationException):
    """Raised when a verification payload cannot be decoded into the expected fields."""

    def __init__(self, message: str = "malformed_link"):
        super().__init__(message, error_code="MALFORMED_LINK", status_code=400)


class SignupNotFoundError(VerificationException):
    """Raised when no signup exists for the presented email."""

    def __init__(self, email: str):
        super().__init__(
            "signup_not_found",
            error_code="NOT_FOUND",
            details={"email": email},
            status_code=404,
        )


class NoActiveTokenError(VerificationException):
    """Raised when a signup has no pending verification token."""

    def __init__(self, email: str, *, already_verified: bool):
        self.already_verified = already_verified
        super().__init__(
            "no_active_token",
            error_code="NO_ACTIVE_TOKEN",
            details={"email": email},
            status_code=404,
        )


class LinkExpiredError(VerificationException):
    """Raised when the active token is past its expiry."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("link_expired", error_code="LINK_EXPIRED", status_code=400)


class TokenMismatchError(VerificationException):
    """Raised when the presented secret does not match the active token."""

    def __init__(self) -> None:
        super().__init__("token_mismatch", error_code="TOKEN_MISMATCH", status_code=400)


class AlreadyVerifiedError(VerificationException):
    """Raised when a resend is requested for an already verified email."""

    def __init__(self, email: str):
        super().__init__(
            "already_verified",
            error_code="ALREADY_VERIFIED",
            details={"email": email},
            status_code=400,
        )


# ===== INFRASTRUCTURE EXCEPTIONS =====


class StoreError(OnboardingException):
    """Raised when the record store cannot complete an operation."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"Internal server error ({operation}).",
            error_code="STORE_ERROR",
            status_code=500,
        )


class MailError(OnboardingException):
    """Raised when an outbound email cannot be delivered."""

    def __init__(self, message: str = "Internal server error (email)."):
        super().__init__(message, error_code="MAIL_ERROR", status_code=500)
