"""Tests for ErrorService.report (the public entry point)."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from errorkit.audit.log_sink import LogAuditSink
from errorkit.config.settings import Settings
from errorkit.errors.dispatcher import ErrorDispatcher
from errorkit.errors.exceptions import ReportedError
from errorkit.errors.messages import ErrorKind, Severity
from errorkit.errors.models import NormalizedError
from errorkit.errors.service import ErrorService, build_error_service


class TestReport:
    @pytest.mark.asyncio
    async def test_returns_normalized_error(self, service: ErrorService) -> None:
        error = await service.report("Simple string failure", MagicMock(), "Header")
        assert error == NormalizedError(
            kind=ErrorKind.STRING_ERROR,
            message="Simple string failure",
            trace="",
            severity=Severity.INFO,
            context="Header",
        )

    @pytest.mark.asyncio
    async def test_notifies_and_audits(self, service: ErrorService, audit_sink, widget) -> None:
        await service.report([{"message": "a"}, {"message": "b"}], widget, "AccountList")
        assert widget.events[0].message == "a, b"
        assert widget.events[0].severity == Severity.WARNING
        assert audit_sink.entries[0].error_type == ErrorKind.AGGREGATE
        assert audit_sink.entries[0].context == "AccountList"

    @pytest.mark.asyncio
    async def test_passes_record_id(self, service: ErrorService, audit_sink) -> None:
        await service.report("x", None, record_id="a01")
        assert audit_sink.entries[0].record_id == "a01"

    @pytest.mark.asyncio
    async def test_classification_precedes_dispatch(self) -> None:
        dispatcher = AsyncMock(spec=ErrorDispatcher)
        service = ErrorService(dispatcher)
        error = await service.report({"message": "Network down"}, None, "ctx")
        dispatcher.dispatch.assert_awaited_once_with(error, None, record_id=None)

    @pytest.mark.asyncio
    async def test_concurrent_reports_are_independent(
        self, service: ErrorService, audit_sink
    ) -> None:
        first, second = await asyncio.gather(
            service.report("first", None, "AccountList"),
            service.report(ValueError("second"), None, "HeaderStandard"),
        )
        assert first.context == "AccountList"
        assert second.context == "HeaderStandard"
        assert sorted(e.context for e in audit_sink.entries) == ["AccountList", "HeaderStandard"]


class TestFailureIsolation:
    @pytest.mark.asyncio
    async def test_both_sinks_failing_still_returns_record(self, failing_audit_sink) -> None:
        service = ErrorService(ErrorDispatcher(failing_audit_sink))
        target = MagicMock(side_effect=RuntimeError("toast broke"))
        error = await service.report({"message": "Network down"}, target, "AccountList")
        assert error.kind == ErrorKind.OBJECT_ERROR
        assert error.message == "Network down"
        assert error.severity == Severity.ERROR
        assert error.trace == ""
        assert error.context == "AccountList"

    @pytest.mark.asyncio
    async def test_dispatcher_raising_is_contained(self) -> None:
        dispatcher = AsyncMock(spec=ErrorDispatcher)
        dispatcher.dispatch.side_effect = RuntimeError("dispatcher exploded")
        service = ErrorService(dispatcher)
        with patch("errorkit.errors.service.Log") as mock_log:
            error = await service.report("oops")
        assert error.message == "oops"
        assert "dispatcher exploded" in mock_log.error.call_args.args[0]

    @pytest.mark.asyncio
    async def test_unknown_input(self, service: ErrorService) -> None:
        error = await service.report(None)
        assert error.kind == ErrorKind.UNKNOWN
        assert error.severity == Severity.ERROR


class TestAlreadyReported:
    @pytest.mark.asyncio
    async def test_reported_error_is_not_dispatched_again(self) -> None:
        dispatcher = AsyncMock(spec=ErrorDispatcher)
        service = ErrorService(dispatcher)
        record = NormalizedError(
            kind="QUERY_TIMEOUT", message="Query took too long", context="AccountList"
        )
        error = await service.report(ReportedError(record), None, "AccountList")
        assert error is record
        dispatcher.dispatch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_normalized_error_is_still_dispatched(
        self, service: ErrorService, audit_sink
    ) -> None:
        record = NormalizedError(kind="x", message="m")
        await service.report(record)
        assert len(audit_sink.entries) == 1


class TestBuildErrorService:
    def test_uses_configured_sink_and_title(self) -> None:
        settings = Settings(audit_sink="log", error_title="Oops", notification_mode="pester")
        with patch("errorkit.errors.service.ErrorDispatcher") as mock_dispatcher:
            service = build_error_service(settings)
        assert isinstance(service, ErrorService)
        args, kwargs = mock_dispatcher.call_args
        assert isinstance(args[0], LogAuditSink)
        assert kwargs == {"title": "Oops", "mode": "pester"}
