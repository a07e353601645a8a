"""Unit tests for CorrelationContext header resolution."""

from __future__ import annotations

from todo_service.observability.correlation import CorrelationContext, RequestContext


class TestCorrelationContext:
    def teardown_method(self) -> None:
        CorrelationContext.clear()

    def test_correlation_header_wins(self) -> None:
        ctx = CorrelationContext.set_from_headers(
            {"X-Correlation-ID": "corr", "X-Request-ID": "req"}
        )
        assert ctx.correlation_id == "corr"
        assert CorrelationContext.get() == ctx

    def test_request_id_fallback(self) -> None:
        assert CorrelationContext.set_from_headers({"x-request-id": "req"}).correlation_id == "req"

    def test_traceparent_fallback(self) -> None:
        ctx = CorrelationContext.set_from_headers(
            {"traceparent": "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01"}
        )
        assert ctx.correlation_id == "4bf92f3577b34da6a3ce929d0e0e4736"
        assert ctx.trace_id == ctx.correlation_id

    def test_generated_when_absent(self) -> None:
        ctx = CorrelationContext.set_from_headers({})
        assert len(ctx.correlation_id) == 36

    def test_get_or_new_reuses_current(self) -> None:
        CorrelationContext.set(RequestContext(correlation_id="fixed"))
        assert CorrelationContext.get_or_new().correlation_id == "fixed"
        CorrelationContext.clear()
        assert CorrelationContext.get() is None
        assert CorrelationContext.get_or_new().correlation_id
