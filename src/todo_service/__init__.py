"""
todo_service – Todo CRUD service with resilient persistence.

Import path convention::

    from todo_service.kernel.types import Success, ValidationFailure, NotFound
    from todo_service.resilience import CircuitBreaker, RetryPolicy, ResiliencePipeline
    from todo_service.application.todos import TodoService
    from todo_service.adapters.fastapi import create_app
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
