import inspect
from collections.abc import Callable
from typing import Any

from errorkit.errors.dispatcher import NotifyTarget
from errorkit.errors.models import NormalizedError
from errorkit.errors.service import ErrorService


class ErrorBoundary:
    """Guards a widget: reports its failures and remembers that one happened."""

    def __init__(
        self,
        service: ErrorService,
        component_name: str = "Unknown",
        notify_target: NotifyTarget = None,
    ) -> None:
        self._service = service
        self.component_name = component_name
        self._notify_target = notify_target
        self.has_error = False
        self.last_error: NormalizedError | None = None

    async def catch_error(self, error: Any) -> NormalizedError:
        """Report a failure caught by the widget."""
        self.has_error = True
        self.last_error = await self._service.report(
            error, self._notify_target, self.component_name
        )
        return self.last_error

    async def guard(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run ``fn``, awaiting its result when needed, and report any exception.

        Returns None on failure.
        """
        try:
            result = fn(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            await self.catch_error(exc)
            return None
        return result

    def reset(self) -> None:
        self.has_error = False
        self.last_error = None
