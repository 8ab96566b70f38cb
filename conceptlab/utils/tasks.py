"""
Safe asyncio task creation with error logging.

Replaces bare `asyncio.create_task()` calls that silently swallow
exceptions in fire-and-forget coroutines.
"""

import asyncio
import logging

logger = logging.getLogger(__name__)

# Strong references so running tasks are not garbage collected
_background_tasks: set[asyncio.Task] = set()


def safe_create_task(coro, *, name: str = None) -> asyncio.Task:
    """Create an asyncio task with automatic error logging.

    Use this instead of ``asyncio.create_task()`` for fire-and-forget
    background work.  If the task raises, the exception is logged with
    full traceback instead of being silently ignored.
    """
    task = asyncio.create_task(coro, name=name)
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    task.add_done_callback(_log_task_exception)
    return task


def _log_task_exception(task: asyncio.Task) -> None:
    """Done-callback that logs unhandled task exceptions."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc:
        logger.error(
            "Background task '%s' failed: %s",
            task.get_name(),
            exc,
            exc_info=exc,
        )
