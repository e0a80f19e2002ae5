"""
Middleware Executor for crudpipe.

Runs an ordered list of async middlewares over a shared context,
onion-style. Each middleware receives the context and a continuation;
awaiting the continuation runs the rest of the chain.

    async def timing(ctx, call_next):
        start = time.perf_counter()
        await call_next()
        ctx.state["duration"] = time.perf_counter() - start
"""
from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Iterable, TypeVar

logger = logging.getLogger(__name__)

C = TypeVar("C")

Next = Callable[[], Awaitable[None]]
Middleware = Callable[[Any, Next], Awaitable[None] | None]


class DoubleContinuationError(Exception):
    """
    Raised when a middleware calls its continuation more than once.

    Always a bug in the middleware: a second call would re-run the
    downstream chain against the same context.
    """

    def __init__(self, position: int, middleware_name: str | None = None):
        self.position = position
        self.middleware_name = middleware_name
        where = f" by '{middleware_name}'" if middleware_name else ""
        super().__init__(
            f"too many next() invocations at position {position}{where}"
        )


def _middleware_name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__name__", type(fn).__name__)


async def execute_middlewares(middlewares: Iterable[Any], ctx: C) -> None:
    """
    Run middlewares in order over ctx.

    Non-callable entries are dropped. A middleware that does not call
    its continuation ends the run; running past the last middleware
    completes normally. Exceptions propagate unchanged.

    Raises:
        DoubleContinuationError: If a continuation is called twice
    """
    chain = [fn for fn in middlewares if callable(fn)]

    async def dispatch(index: int) -> None:
        if index >= len(chain):
            return

        fn = chain[index]
        called = False

        def call_next() -> Awaitable[None]:
            nonlocal called
            if called:
                raise DoubleContinuationError(index + 1, _middleware_name(fn))
            called = True
            return dispatch(index + 1)

        logger.debug(f"Middleware {index} '{_middleware_name(fn)}' starting")
        outcome = fn(ctx, call_next)
        if inspect.isawaitable(outcome):
            await outcome

    await dispatch(0)


class MiddlewarePipeline:
    """
    Reusable ordered middleware chain.

    Holds no per-run state, so one instance can serve concurrent
    requests; each run gets its own cursor.

    Example:
        pipeline = MiddlewarePipeline([authenticate, audit, dispatch])
        await pipeline.run(ctx)
    """

    def __init__(self, middlewares: Iterable[Any] = ()):
        self.middlewares = [fn for fn in middlewares if callable(fn)]

    @property
    def middleware_names(self) -> list[str]:
        """Get names of all middlewares in order."""
        return [_middleware_name(fn) for fn in self.middlewares]

    async def run(self, ctx: C) -> C:
        """Run the chain over ctx and return it."""
        await execute_middlewares(self.middlewares, ctx)
        return ctx

    def __len__(self) -> int:
        return len(self.middlewares)

    def __repr__(self) -> str:
        return f"MiddlewarePipeline(middlewares={self.middleware_names})"


class PipelineBuilder:
    """
    Builder for middleware pipelines with a fluent API.

    Example:
        pipeline = (
            PipelineBuilder()
            .add(authenticate)
            .add_if(settings.debug, log_body)
            .build()
        )
    """

    def __init__(self) -> None:
        self._middlewares: list[Middleware] = []

    def add(self, middleware: Middleware) -> "PipelineBuilder":
        """Add a middleware to the end of the chain."""
        self._middlewares.append(middleware)
        return self

    def add_if(self, condition: bool, middleware: Middleware) -> "PipelineBuilder":
        """Conditionally add a middleware."""
        if condition:
            self._middlewares.append(middleware)
        return self

    def extend(self, middlewares: Iterable[Middleware]) -> "PipelineBuilder":
        """Add several middlewares in order."""
        self._middlewares.extend(middlewares)
        return self

    def build(self) -> MiddlewarePipeline:
        """Build and return the pipeline."""
        return MiddlewarePipeline(self._middlewares)
