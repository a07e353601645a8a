"""Kernel time – Clock port + implementations."""
from todo_service.kernel.time.clock import Clock, FrozenClock, SystemClock, isoformat_utc

__all__ = ["Clock", "FrozenClock", "SystemClock", "isoformat_utc"]
