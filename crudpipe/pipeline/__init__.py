"""
crudpipe Middleware Pipeline

Onion-style composition of async middlewares over a shared, mutable
context. Each middleware decides whether the rest of the chain runs by
awaiting (or not) its continuation.

Core Components:
- execute_middlewares: Single-pass executor with per-run cursor state
- MiddlewarePipeline: Reusable ordered chain
- PipelineBuilder: Fluent construction
- MiddlewareContext: Request-scoped shared record
"""

from .context import MiddlewareContext
from .executor import (
    DoubleContinuationError,
    Middleware,
    MiddlewarePipeline,
    Next,
    PipelineBuilder,
    execute_middlewares,
)

__all__ = [
    "DoubleContinuationError",
    "Middleware",
    "MiddlewareContext",
    "MiddlewarePipeline",
    "Next",
    "PipelineBuilder",
    "execute_middlewares",
]
