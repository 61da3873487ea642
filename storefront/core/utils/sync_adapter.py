"""
Synchronous-over-asynchronous adapter.

Only for legacy synchronous callers at the edge of the application. The
storefront services expose coroutines; this helper runs one on a worker
thread with its own event loop and blocks until it finishes.

It refuses to run when the calling thread already has a running event loop:
blocking that loop while waiting on work scheduled for it deadlocks.
"""

import asyncio
import concurrent.futures
import logging
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_sync(coroutine_factory: Callable[[], Awaitable[T]], timeout: float | None = None) -> T:
    """
    Run an async callable to completion from synchronous code.

    Args:
        coroutine_factory: Zero-argument callable returning the awaitable to run
        timeout: Optional seconds to wait for the result

    Returns:
        The awaitable's result

    Raises:
        RuntimeError: If called from a thread with a running event loop
        concurrent.futures.TimeoutError: If ``timeout`` elapses
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        raise RuntimeError("run_sync() cannot be called from a running event loop; await the coroutine instead")

    async def _runner() -> Any:
        return await coroutine_factory()

    pool = concurrent.futures.ThreadPoolExecutor(max_workers=1)
    future = pool.submit(asyncio.run, _runner())
    try:
        return future.result(timeout=timeout)
    except concurrent.futures.TimeoutError:
        logger.warning(f"run_sync timed out after {timeout}s, leaving the worker to finish in background")
        raise
    finally:
        # Do not wait on a timed out worker
        pool.shutdown(wait=False)
