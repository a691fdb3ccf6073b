"""Shared constants for error classification and notifications."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Closed set of classification tags produced by the classifier."""

    RUNTIME_FAULT = "runtime_fault"
    BACKEND_ERROR = "backend_error"
    AGGREGATE = "aggregate"
    NETWORK_ERROR = "network_error"
    STRING_ERROR = "string_error"
    OBJECT_ERROR = "object_error"
    UNKNOWN = "unknown"


class Severity(StrEnum):
    """Presentation urgency of a notification."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


DEFAULT_ERROR_TITLE = "Something went wrong"
STICKY_MODE = "sticky"

UNKNOWN_MESSAGE = "An unknown error occurred"
NETWORK_MESSAGE = "A network error occurred. Please try again later."
SERVER_MESSAGE = "A server error occurred. Please contact support."
CLIENT_MESSAGE = "A client-side error occurred. Please try again or contact support."

# Used when classification produced an empty message.
DEFAULT_MESSAGES: dict[str, str] = {
    ErrorKind.RUNTIME_FAULT: CLIENT_MESSAGE,
    ErrorKind.BACKEND_ERROR: SERVER_MESSAGE,
    ErrorKind.NETWORK_ERROR: NETWORK_MESSAGE,
}
