import psycopg

from errorkit.audit.base import BaseAuditSink
from errorkit.database.repositories.exception_log_repository import ExceptionLogRepository
from errorkit.errors.exceptions import AuditWriteError
from errorkit.errors.models import AuditEntry
from errorkit.logging.logger import Log


class DatabaseAuditSink(BaseAuditSink):
    """Persists audit entries to the exception_logs table."""

    def __init__(self, repository: ExceptionLogRepository | None = None) -> None:
        self._repository = repository or ExceptionLogRepository()

    async def write(self, entry: AuditEntry) -> None:
        try:
            log_id = await self._repository.insert(
                error_type=entry.error_type,
                error_message=entry.error_message,
                stack_trace=entry.stack_trace,
                record_id=entry.record_id,
                severity=entry.severity,
                context=entry.context,
            )
        except (psycopg.Error, RuntimeError) as exc:
            raise AuditWriteError(f"Failed to write exception log: {exc}") from exc
        Log.debug(f"Exception log {log_id} written for {entry.error_type}")
