from typing import Any

from errorkit.audit.factory import AuditSinkFactory
from errorkit.config.settings import Settings
from errorkit.errors.classifier import classify
from errorkit.errors.dispatcher import ErrorDispatcher, NotifyTarget
from errorkit.errors.exceptions import ReportedError
from errorkit.errors.models import NormalizedError
from errorkit.logging.logger import Log


class ErrorService:
    """Single entry point for reporting failures.

    Pipeline: classify -> notify + audit -> return the normalized record.
    """

    def __init__(self, dispatcher: ErrorDispatcher) -> None:
        self._dispatcher = dispatcher

    async def report(
        self,
        raw: Any,
        notify_target: NotifyTarget = None,
        context: str = "",
        *,
        record_id: str | None = None,
    ) -> NormalizedError:
        """Normalize ``raw``, deliver it to both sinks, and return it.

        Never raises. Callers that need to propagate the failure can wrap the
        returned record in ``ReportedError``; a ``ReportedError`` reported
        again is returned without a second dispatch.
        """
        error = classify(raw, context)
        if isinstance(raw, ReportedError):
            Log.debug(f"Skipping dispatch of already reported {error.kind}", context=error.context)
            return error
        try:
            await self._dispatcher.dispatch(error, notify_target, record_id=record_id)
        except Exception as exc:
            Log.error(f"Error dispatch failed: {exc}", context=error.context)
        return error


def build_error_service(settings: Settings) -> ErrorService:
    """Build an ErrorService with the configured audit sink."""
    dispatcher = ErrorDispatcher(
        AuditSinkFactory.create(settings),
        title=settings.error_title,
        mode=settings.notification_mode,
    )
    return ErrorService(dispatcher)
