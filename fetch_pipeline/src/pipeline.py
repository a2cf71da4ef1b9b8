"""Pipeline builder for composing request middleware.

A pipeline is built once from an ordered list of middleware and a base
executor, then called like a plain request function::

    fetch = compose(base_fetch, [bearer_token(token), trace(), accept_json()])
    response = await fetch("https://api.example.com/items", {"method": "GET"})

The first middleware in the list is the outermost wrapper: it is the first to
see the outgoing request and the last to see the response or error.
"""

from __future__ import annotations

from typing import Any, Awaitable, Iterable, Optional, Protocol

from fetch_pipeline.src.transport import default_fetch
from fetch_pipeline.utils.pylogger import get_python_logger

logger = get_python_logger(__name__)


class Executor(Protocol):
    """Anything that sends a request: the transport or a composed pipeline."""

    def __call__(
        self, url: str, options: Optional[dict] = None
    ) -> Awaitable[Any]: ...


class Middleware(Protocol):
    """A single stage of a pipeline.

    A middleware receives ``next``, the executor for everything downstream of
    it, and must either return ``await next(url, options)`` (possibly with a
    rewritten url or mutated options, and possibly annotating the result) or
    short-circuit by returning or raising on its own. Errors from ``next``
    must be re-raised, never dropped.
    """

    def __call__(
        self, next: Executor, url: str, options: Optional[dict] = None
    ) -> Awaitable[Any]: ...


def _bind(middleware: Middleware, next_executor: Executor) -> Executor:
    async def executor(url: str, options: Optional[dict] = None):
        return await middleware(next_executor, url, options)

    return executor


def compose(base_executor: Executor, middleware: Iterable[Middleware]) -> Executor:
    """Compose middleware around a base executor.

    Args:
        base_executor: Terminal executor performing the actual request.
        middleware: Middleware in execution order, outermost first.

    Returns:
        An executor with the same call signature as ``base_executor``. With no
        middleware this is ``base_executor`` itself.
    """
    chain = tuple(middleware)
    if not chain:
        return base_executor

    executor = base_executor
    for stage in reversed(chain):
        executor = _bind(stage, executor)

    logger.debug("Composed pipeline with %s middleware", len(chain))
    return executor


def create_fetch(*middleware: Middleware, fetch: Optional[Executor] = None) -> Executor:
    """Create a fetch function using all positional arguments as middleware.

    Args:
        *middleware: Middleware in execution order, outermost first.
        fetch: Base executor. Defaults to the shared httpx transport.
    """
    if fetch is None:
        fetch = default_fetch
    return compose(fetch, middleware)
