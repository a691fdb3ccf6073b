"""Wrappers for backend calls that route failures through the ErrorService.

Both wrappers report the failure (notification + audit) and then raise
``ReportedError`` so the caller decides how to continue.
"""

import inspect
from collections.abc import Callable
from typing import Any

import httpx

from errorkit.config.settings import Settings
from errorkit.errors.dispatcher import NotifyTarget
from errorkit.errors.exceptions import ReportedError
from errorkit.errors.service import ErrorService
from errorkit.logging.logger import Log


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the AsyncClient used with call_fetch."""
    return httpx.AsyncClient(timeout=settings.http_timeout_seconds)


async def call_remote(
    method: Callable[[dict[str, Any]], Any],
    params: dict[str, Any] | None = None,
    notify_target: NotifyTarget = None,
    *,
    service: ErrorService,
    context: str = "",
) -> Any:
    """Call a remote procedure with a single params mapping.

    ``method`` may be a coroutine function or a plain callable.

    Raises:
        ReportedError: wrapping the normalized failure, chained from the
            original exception.
    """
    name = getattr(method, "__name__", type(method).__name__)
    Log.debug(f"Calling remote method {name}", context=context)
    try:
        result = method(params or {})
        if inspect.isawaitable(result):
            result = await result
    except Exception as exc:
        error = await service.report(exc, notify_target, context or name)
        raise ReportedError(error) from exc
    return result


async def call_fetch(
    client: httpx.AsyncClient,
    url: str,
    *,
    method: str = "GET",
    notify_target: NotifyTarget = None,
    service: ErrorService,
    context: str = "",
    **kwargs: Any,
) -> Any:
    """Perform an HTTP request and return the decoded body.

    JSON responses are decoded; anything else is returned as text. Non-2xx
    responses are reported as network errors.

    Raises:
        ReportedError: on transport failures and error status codes.
    """
    try:
        response = await client.request(method, url, **kwargs)
        response.raise_for_status()
        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            return response.json()
        return response.text
    except Exception as exc:
        error = await service.report(exc, notify_target, context or url)
        raise ReportedError(error) from exc
