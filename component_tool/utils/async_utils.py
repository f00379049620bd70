# component_tool/utils/async_utils.py
"""Asynchronous operation utilities"""

import asyncio
import logging
from typing import Any, Awaitable, Coroutine, Optional, TypeVar

T = TypeVar('T')

logger = logging.getLogger(__name__)


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run async coroutine in sync context

    Args:
        coro: Coroutine to run

    Returns:
        Coroutine result
    """
    loop = None
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        # No running loop
        pass

    if loop and loop.is_running():
        # Already in async context, create new thread
        import threading

        result = None
        exception = None

        def run_in_thread():
            nonlocal result, exception
            try:
                new_loop = asyncio.new_event_loop()
                asyncio.set_event_loop(new_loop)
                result = new_loop.run_until_complete(coro)
                new_loop.close()
            except Exception as e:
                exception = e

        thread = threading.Thread(target=run_in_thread)
        thread.start()
        thread.join()

        if exception:
            raise exception
        return result
    else:
        # No running loop, use asyncio.run
        return asyncio.run(coro)


async def best_effort(awaitable: Awaitable[T], default: Optional[T] = None) -> Optional[T]:
    """
    Await an optional sub-lookup, substituting a default on any failure

    The error is discarded on purpose: callers use this for conveniences
    whose absence must not fail the surrounding operation.

    Args:
        awaitable: Awaitable to run
        default: Value returned when the awaitable raises

    Returns:
        Awaitable result or default
    """
    try:
        return await awaitable
    except Exception as e:
        logger.debug("Best-effort lookup failed, using default: %s", e)
        return default

