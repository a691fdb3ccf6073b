"""Turns arbitrary failure values into NormalizedError records.

Classification runs in two steps. ``identify_shape`` walks ``SHAPE_RULES`` in
priority order and returns the first matching raw failure shape; the shape
is then described as a (kind, message, trace) triple. The order of the rules
matters because the shapes overlap: an exception raised by a remote call may
carry a ``body``, and a mapping with a ``body`` also has fields of its own.
"""

import json
import traceback
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any

from errorkit.errors.exceptions import ReportedError
from errorkit.errors.messages import DEFAULT_MESSAGES, UNKNOWN_MESSAGE, ErrorKind
from errorkit.errors.models import (
    AggregateFailure,
    BodyFailure,
    MessageObjectFailure,
    NormalizedError,
    PlainObjectFailure,
    RawFailureShape,
    ResponseFailure,
    RuntimeFault,
    StringFailure,
    UnknownFailure,
)
from errorkit.errors.severity import severity_for
from errorkit.logging.logger import Log

_TRACE_FIELDS = ("stack", "stackTrace", "trace")
_STATUS_FIELDS = ("status", "status_code")
_STATUS_TEXT_FIELDS = ("statusText", "status_text", "reason_phrase")
_RESPONSE_DATA_FIELDS = ("data", "text")
_ERROR_CODE_FIELDS = ("errorCode", "error_code")
_SCALARS = (str, bytes, int, float, bool)


def _field(value: Any, name: str) -> Any:
    """Read ``name`` from a mapping key or an object attribute."""
    if value is None or isinstance(value, _SCALARS):
        return None
    try:
        if isinstance(value, Mapping):
            return value.get(name)
        return getattr(value, name, None)
    except Exception:
        # Properties that raise (e.g. an unread streaming response body).
        return None


def _first_field(value: Any, names: tuple[str, ...]) -> Any:
    for name in names:
        found = _field(value, name)
        if found:
            return found
    return None


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_object(value: Any) -> bool:
    if value is None or isinstance(value, _SCALARS) or _is_sequence(value):
        return False
    if isinstance(value, Mapping):
        return bool(value)
    return True


def _json_default(value: Any) -> Any:
    if hasattr(value, "__dict__"):
        return vars(value)
    return str(value)


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return json.dumps(
            value,
            default=_json_default,
            separators=(",", ":"),
            ensure_ascii=False,
        )
    except (TypeError, ValueError):
        return repr(value)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else _stringify(value)


def _format_trace(exc: BaseException) -> str:
    return "".join(traceback.format_exception(exc)).rstrip()


def _exception_trace(value: Any) -> str:
    return _format_trace(value) if isinstance(value, BaseException) else ""


def _as_kind(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _message_of(item: Any) -> str:
    if isinstance(item, BaseException):
        return str(item) or type(item).__name__
    if isinstance(item, str):
        return item
    message = _field(item, "message")
    return _text(message) if message else _stringify(item)


def _join_messages(items: Any) -> str:
    return ", ".join(_message_of(item) for item in items)


def _response_status(value: Any) -> Any:
    return _first_field(_field(value, "response"), _STATUS_FIELDS)


def _has_response_status(value: Any) -> bool:
    return bool(_response_status(value))


def _has_body(value: Any) -> bool:
    return bool(_field(value, "body"))


def _is_runtime_fault(value: Any) -> bool:
    # Exceptions from RPC clients carry a body or a response; those are
    # classified by their payload instead.
    return (
        isinstance(value, BaseException)
        and not _has_body(value)
        and not _has_response_status(value)
    )


def _is_aggregate(value: Any) -> bool:
    return _is_sequence(value) and bool(value)


def _is_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _has_message(value: Any) -> bool:
    return _is_object(value) and bool(_field(value, "message"))


SHAPE_RULES: tuple[tuple[Callable[[Any], bool], Callable[[Any], RawFailureShape]], ...] = (
    (_is_runtime_fault, RuntimeFault),
    (
        _has_body,
        lambda value: BodyFailure(
            body=_field(value, "body"),
            status=_field(value, "status"),
            trace=_exception_trace(value),
        ),
    ),
    (_is_aggregate, lambda value: AggregateFailure(items=list(value))),
    (
        _has_response_status,
        lambda value: ResponseFailure(
            response=_field(value, "response"),
            trace=_exception_trace(value) or _text(_first_field(value, _TRACE_FIELDS)),
        ),
    ),
    (_is_string, StringFailure),
    (
        _has_message,
        lambda value: MessageObjectFailure(
            message=_field(value, "message"),
            status=_field(value, "status"),
            trace=_text(_first_field(value, _TRACE_FIELDS)),
        ),
    ),
    (
        _is_object,
        lambda value: PlainObjectFailure(value=value, status=_field(value, "status")),
    ),
)


def identify_shape(raw: Any) -> RawFailureShape:
    """Return the first raw failure shape whose predicate matches ``raw``."""
    for matches, build in SHAPE_RULES:
        if matches(raw):
            return build(raw)
    return UnknownFailure(value=raw)


def _describe_body(shape: BodyFailure) -> tuple[str, str, str]:
    body = shape.body
    trace = shape.trace
    code = None
    fallback_kind: str = ErrorKind.BACKEND_ERROR

    if _is_sequence(body):
        message = _join_messages(body)
        fallback_kind = ErrorKind.AGGREGATE
    elif isinstance(body, str):
        message = body
    else:
        errors = _field(_field(body, "output"), "errors")
        if _is_sequence(errors) and errors:
            message = _join_messages(errors)
        else:
            message = _text(_field(body, "message")) or _stringify(body)
        trace = _text(_first_field(body, _TRACE_FIELDS)) or trace
        code = _first_field(body, _ERROR_CODE_FIELDS)

    kind = _as_kind(code) or _as_kind(shape.status) or fallback_kind
    return kind, message, trace


def _describe_response(shape: ResponseFailure) -> tuple[str, str, str]:
    response = shape.response
    message = _text(_first_field(response, _STATUS_TEXT_FIELDS)) or _text(
        _first_field(response, _RESPONSE_DATA_FIELDS)
    )
    return ErrorKind.NETWORK_ERROR, message, shape.trace


def _describe(shape: RawFailureShape) -> tuple[str, str, str]:
    """Return the (kind, message, trace) triple for a raw failure shape."""
    if isinstance(shape, RuntimeFault):
        exc = shape.exc
        return ErrorKind.RUNTIME_FAULT, str(exc) or type(exc).__name__, _format_trace(exc)
    if isinstance(shape, BodyFailure):
        return _describe_body(shape)
    if isinstance(shape, AggregateFailure):
        return ErrorKind.AGGREGATE, _join_messages(shape.items), ""
    if isinstance(shape, ResponseFailure):
        return _describe_response(shape)
    if isinstance(shape, StringFailure):
        return ErrorKind.STRING_ERROR, shape.text, ""
    if isinstance(shape, MessageObjectFailure):
        kind = _as_kind(shape.status) or ErrorKind.OBJECT_ERROR
        return kind, _text(shape.message), shape.trace
    if isinstance(shape, PlainObjectFailure):
        kind = _as_kind(shape.status) or ErrorKind.OBJECT_ERROR
        return kind, _stringify(shape.value), ""
    value = shape.value
    return ErrorKind.UNKNOWN, str(value) if value else "", ""


def _already_normalized(raw: Any) -> NormalizedError | None:
    if isinstance(raw, NormalizedError):
        return raw
    if isinstance(raw, ReportedError):
        return raw.error
    return None


def _fallback(raw: Any, context: str) -> NormalizedError:
    message = ""
    if raw is not None:
        try:
            message = str(raw)
        except Exception:
            message = ""
    return NormalizedError(
        kind=ErrorKind.UNKNOWN,
        message=message or UNKNOWN_MESSAGE,
        trace="",
        severity=severity_for(ErrorKind.UNKNOWN),
        context=context,
    )


def classify(raw: Any, context: str = "") -> NormalizedError:
    """Normalize any failure value. Never raises.

    Args:
        raw: The failure as caught: an exception, a backend error payload,
            a list of sub-errors, a response-carrying object, a string, or
            anything else.
        context: Optional label of the component or operation that failed.

    Returns:
        A fully populated NormalizedError. Severity comes from the severity
        table for the resolved kind.
    """
    context = context or ""
    try:
        existing = _already_normalized(raw)
        if existing is not None:
            if existing.context or not context:
                return existing
            return replace(existing, context=context)
        kind, message, trace = _describe(identify_shape(raw))
    except Exception as exc:
        Log.warning(f"Error classification failed, using unknown: {exc}", context=context)
        return _fallback(raw, context)

    record = NormalizedError(
        kind=kind,
        message=message or DEFAULT_MESSAGES.get(kind, UNKNOWN_MESSAGE),
        trace=trace or "",
        severity=severity_for(kind),
        context=context,
    )
    Log.debug(
        f"Classified failure as {record.kind}: {record.message}",
        severity=str(record.severity),
        context=context,
    )
    return record
