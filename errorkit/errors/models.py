from dataclasses import dataclass, field
from typing import Any

from errorkit.errors.messages import Severity


@dataclass(frozen=True)
class NormalizedError:
    """A failure converted into the single shape every sink understands."""

    kind: str
    message: str
    trace: str = ""
    severity: Severity = Severity.ERROR
    context: str = ""


@dataclass(frozen=True)
class Notification:
    """Transient notification shown to the user."""

    title: str
    message: str
    severity: Severity
    mode: str


@dataclass(frozen=True)
class AuditEntry:
    """Payload handed to the durable audit sink."""

    error_type: str
    error_message: str
    severity: Severity
    stack_trace: str | None = None
    record_id: str | None = None
    context: str | None = None


@dataclass(frozen=True)
class DispatchOutcome:
    """Result of one sink delivery attempt."""

    sink: str
    delivered: bool
    detail: str = ""


# Raw failure shapes. The classifier maps every input onto exactly one of
# these before building a NormalizedError.


@dataclass(frozen=True)
class RuntimeFault:
    exc: BaseException


@dataclass(frozen=True)
class BodyFailure:
    body: Any
    status: Any = None
    trace: str = ""


@dataclass(frozen=True)
class AggregateFailure:
    items: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class ResponseFailure:
    response: Any
    trace: str = ""


@dataclass(frozen=True)
class StringFailure:
    text: str


@dataclass(frozen=True)
class MessageObjectFailure:
    message: Any
    status: Any = None
    trace: str = ""


@dataclass(frozen=True)
class PlainObjectFailure:
    value: Any
    status: Any = None


@dataclass(frozen=True)
class UnknownFailure:
    value: Any = None


RawFailureShape = (
    RuntimeFault
    | BodyFailure
    | AggregateFailure
    | ResponseFailure
    | StringFailure
    | MessageObjectFailure
    | PlainObjectFailure
    | UnknownFailure
)
