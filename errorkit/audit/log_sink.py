"""Audit sink that only writes to the application log.

No database access. Useful for local development and tests, and as a
reference when adding new sinks: implement BaseAuditSink and register the
sink in AuditSinkFactory.
"""

from errorkit.audit.base import BaseAuditSink
from errorkit.errors.models import AuditEntry
from errorkit.logging.logger import Log


class LogAuditSink(BaseAuditSink):
    """Writes audit entries to the application log."""

    async def write(self, entry: AuditEntry) -> None:
        Log.info(
            f"Audit [{entry.severity}] {entry.error_type}: {entry.error_message}",
            record_id=entry.record_id,
            context=entry.context,
        )
        if entry.stack_trace:
            Log.debug(f"Audit stack trace:\n{entry.stack_trace}")
