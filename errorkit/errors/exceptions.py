from errorkit.errors.models import NormalizedError


class ErrorPipelineError(Exception):
    """Base exception for all error-pipeline failures."""


class NotificationDeliveryError(ErrorPipelineError):
    """Raised when a notification target cannot accept a notification."""


class AuditWriteError(ErrorPipelineError):
    """Raised by audit sinks when an entry cannot be persisted."""


class ReportedError(ErrorPipelineError):
    """Carries an already reported NormalizedError up to the caller."""

    def __init__(self, error: NormalizedError) -> None:
        super().__init__(error.message)
        self.error = error
