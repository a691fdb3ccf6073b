from dataclasses import dataclass
from datetime import datetime


@dataclass
class ExceptionLogRecord:
    """Represents a row from the exception_logs table."""

    id: int
    error_type: str
    error_message: str
    severity: str
    stack_trace: str | None = None
    record_id: str | None = None
    context: str | None = None
    created_at: datetime | None = None
