from unittest.mock import AsyncMock

import pytest

from errorkit.audit.base import BaseAuditSink
from errorkit.errors.dispatcher import ErrorDispatcher
from errorkit.errors.models import AuditEntry, Notification
from errorkit.errors.service import ErrorService


class RecordingAuditSink(BaseAuditSink):
    """Audit sink that keeps every entry in memory."""

    def __init__(self) -> None:
        self.entries: list[AuditEntry] = []

    async def write(self, entry: AuditEntry) -> None:
        self.entries.append(entry)


class RecordingWidget:
    """Widget-like notification target exposing dispatch_event."""

    def __init__(self) -> None:
        self.events: list[Notification] = []

    def dispatch_event(self, event: Notification) -> bool:
        self.events.append(event)
        return True


@pytest.fixture()
def audit_sink() -> RecordingAuditSink:
    return RecordingAuditSink()


@pytest.fixture()
def widget() -> RecordingWidget:
    return RecordingWidget()


@pytest.fixture()
def dispatcher(audit_sink: RecordingAuditSink) -> ErrorDispatcher:
    return ErrorDispatcher(audit_sink)


@pytest.fixture()
def service(dispatcher: ErrorDispatcher) -> ErrorService:
    return ErrorService(dispatcher)


@pytest.fixture()
def failing_audit_sink() -> AsyncMock:
    sink = AsyncMock(spec=BaseAuditSink)
    sink.write.side_effect = RuntimeError("audit down")
    return sink
