class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class IdentityError(DomainError):
    """Raised when the employee cannot be identified for attendance."""


class VerificationUnavailable(IdentityError):
    """Raised when the employee has no enrolled reference image."""


class VerificationFailure(DomainError):
    """Raised when face verification does not confirm the employee."""

    retryable = False


class FaceMismatch(VerificationFailure):
    """The captured face does not match the reference image."""


class VerificationServiceError(VerificationFailure):
    """The verification service failed; callers may retry."""

    retryable = True


class SessionOrderViolation(DomainError):
    """Raised when check-in/check-out is called out of turn."""


class NoOpenSession(DomainError):
    """Raised when checking out with no check-in recorded for the day."""


class RateNotFound(DomainError):
    """Raised when no hourly rate can be resolved for an employee."""


class RecordNotFound(DomainError):
    """Raised when no attendance day exists for the requested date."""


class UploadError(DomainError):
    """Raised when the media store rejects or fails to store an image."""


class StaleRecordError(DomainError):
    """Raised by repositories when a conditional write lost a race."""
