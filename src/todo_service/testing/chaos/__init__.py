"""Testing chaos – failure injection."""
from todo_service.testing.chaos.failure import HANG, FailureScript, FlakyDatabase

__all__ = ["HANG", "FailureScript", "FlakyDatabase"]
