from errorkit.audit.base import BaseAuditSink
from errorkit.audit.database_sink import DatabaseAuditSink
from errorkit.audit.log_sink import LogAuditSink
from errorkit.config.settings import Settings


class AuditSinkFactory:
    """Creates the audit sink selected in settings."""

    SINKS: dict[str, type[BaseAuditSink]] = {
        "database": DatabaseAuditSink,
        "log": LogAuditSink,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseAuditSink:
        name = settings.audit_sink.lower()
        sink_cls = cls.SINKS.get(name)
        if sink_cls is None:
            raise ValueError(
                f"Unknown audit sink '{name}'. Choose from: {list(cls.SINKS)}"
            )
        return sink_cls()
