import inspect
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from errorkit.audit.base import BaseAuditSink
from errorkit.errors.exceptions import NotificationDeliveryError
from errorkit.errors.messages import DEFAULT_ERROR_TITLE, STICKY_MODE
from errorkit.errors.models import AuditEntry, DispatchOutcome, NormalizedError, Notification
from errorkit.logging.logger import Log


@runtime_checkable
class EventDispatcher(Protocol):
    """Anything that can publish an event, such as a widget."""

    def dispatch_event(self, event: Notification) -> Any: ...


NotifyTarget = Callable[[Notification], Any] | EventDispatcher | None


class ErrorDispatcher:
    """Delivers a NormalizedError to the presentation and audit sinks.

    Each sink is attempted exactly once per call and inside its own failure
    boundary. Results are logged and discarded; ``dispatch`` never raises.
    """

    def __init__(
        self,
        audit_sink: BaseAuditSink,
        *,
        title: str = DEFAULT_ERROR_TITLE,
        mode: str = STICKY_MODE,
    ) -> None:
        self._audit_sink = audit_sink
        self._title = title
        self._mode = mode

    async def dispatch(
        self,
        error: NormalizedError,
        notify_target: NotifyTarget = None,
        *,
        record_id: str | None = None,
    ) -> None:
        presented = await self._present(error, notify_target)
        persisted = await self._persist(error, record_id)
        Log.debug(
            f"Dispatched {error.kind}: notification={presented.delivered} "
            f"audit={persisted.delivered}",
            context=error.context,
        )

    def build_notification(self, error: NormalizedError) -> Notification:
        return Notification(
            title=self._title,
            message=error.message,
            severity=error.severity,
            mode=self._mode,
        )

    @staticmethod
    def build_audit_entry(error: NormalizedError, record_id: str | None = None) -> AuditEntry:
        return AuditEntry(
            error_type=error.kind,
            error_message=error.message,
            severity=error.severity,
            stack_trace=error.trace or None,
            record_id=record_id,
            context=error.context or None,
        )

    async def _present(
        self, error: NormalizedError, notify_target: NotifyTarget
    ) -> DispatchOutcome:
        try:
            notification = self.build_notification(error)
            await self._deliver(notification, notify_target)
        except NotificationDeliveryError as exc:
            Log.warning(f"Notification cannot be dispatched: {error.message}", reason=str(exc))
            return DispatchOutcome(sink="notification", delivered=False, detail=str(exc))
        except Exception as exc:
            Log.error(f"Notification dispatch failed: {exc}", context=error.context)
            return DispatchOutcome(sink="notification", delivered=False, detail=str(exc))
        return DispatchOutcome(sink="notification", delivered=True)

    async def _persist(
        self, error: NormalizedError, record_id: str | None
    ) -> DispatchOutcome:
        try:
            await self._audit_sink.write(self.build_audit_entry(error, record_id))
        except Exception as exc:
            Log.error(f"Audit logging failed: {exc}", context=error.context)
            return DispatchOutcome(sink="audit", delivered=False, detail=str(exc))
        return DispatchOutcome(sink="audit", delivered=True)

    @staticmethod
    async def _deliver(notification: Notification, notify_target: NotifyTarget) -> None:
        if callable(notify_target):
            result = notify_target(notification)
        elif isinstance(notify_target, EventDispatcher):
            result = notify_target.dispatch_event(notification)
        else:
            raise NotificationDeliveryError(
                f"unsupported notification target: {type(notify_target).__name__}"
            )
        if inspect.isawaitable(result):
            await result
