"""Observability – correlation context."""
from todo_service.observability.correlation.context import CorrelationContext, RequestContext

__all__ = ["CorrelationContext", "RequestContext"]
