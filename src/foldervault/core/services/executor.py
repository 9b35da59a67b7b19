from __future__ import annotations

"""
Background Execution Wrapper.

Runs archive and metrics operations off the caller's thread. Each call gets
its own daemon worker thread and a Future that resolves exactly once; there
is no pool, no queue and no shared state between invocations. Operations
cannot be cancelled once started.
"""

import logging
import threading
from concurrent.futures import Future
from typing import Any, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_offline(
        operation: Callable[[], T],
        *,
        on_complete: Optional[Callable[[Any], None]] = None,
        name: Optional[str] = None,
) -> "Future[T]":
    """
    Execute `operation` in a dedicated background thread.

    Args:
        operation: Zero-argument callable doing the blocking work.
        on_complete: Optional callback invoked once, from the worker thread,
            with the operation's return value or the exception it raised.
            GUI callers should marshal it onto their own event loop.
        name: Optional worker thread name for log correlation.

    Returns:
        Future[T]: Resolves with the value, or with the raised exception.
    """
    future: "Future[T]" = Future()
    future.set_running_or_notify_cancel()

    def worker() -> None:
        try:
            result = operation()
        except BaseException as e:
            logger.error(f"Background task failed: {e}", exc_info=True)
            future.set_exception(e)
            _notify(on_complete, e)
            return
        future.set_result(result)
        _notify(on_complete, result)

    thread = threading.Thread(target=worker, name=name or "foldervault-worker", daemon=True)
    thread.start()
    logger.debug(f"Background task dispatched on thread '{thread.name}'.")
    return future


def _notify(callback: Optional[Callable[[Any], None]], payload: Any) -> None:
    if callback is None:
        return
    try:
        callback(payload)
    except Exception as e:
        logger.error(f"Completion callback raised: {e}", exc_info=True)

