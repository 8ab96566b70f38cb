"""Progress event system for long-running generation jobs.

Each background video job gets a ProgressTracker; the SSE route replays
its events and then streams new ones until the job completes or fails.
"""

import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Optional

logger = logging.getLogger(__name__)


class ProgressPhase(StrEnum):
    """Phases of a video job."""
    SUBMITTED = "submitted"
    POLLING = "polling"
    DOWNLOADING = "downloading"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass
class ProgressEvent:
    """A single progress update event."""
    phase: ProgressPhase
    message: str
    percent: int  # 0-100
    detail: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "phase": self.phase.value,
            "message": self.message,
            "percent": self.percent,
            "detail": self.detail,
            "timestamp": self.timestamp
        }

    @property
    def is_terminal(self) -> bool:
        return self.phase in (ProgressPhase.COMPLETE, ProgressPhase.ERROR)


class ProgressTracker:
    """Tracks progress for one background job.

    Usage:
        tracker = ProgressTracker(total_steps=30)
        tracker.on_progress_async(callback_fn)

        await tracker.emit(ProgressPhase.POLLING, "Rendering... (Status check 1/30)")
        await tracker.complete("Video ready", detail={"url": ...})
    """

    # Class-level registry of active trackers
    _active_trackers: dict[str, "ProgressTracker"] = {}

    def __init__(self, task_id: str | None = None, total_steps: int = 10):
        self.task_id = task_id or str(uuid.uuid4())
        self.total_steps = total_steps
        self.current_step = 0
        self.events: list[ProgressEvent] = []
        self._async_callbacks: list[Callable[[ProgressEvent], Any]] = []

        ProgressTracker._active_trackers[self.task_id] = self

    @classmethod
    def get(cls, task_id: str) -> Optional["ProgressTracker"]:
        """Get an active tracker by ID."""
        return cls._active_trackers.get(task_id)

    def on_progress_async(self, callback: Callable[[ProgressEvent], Any]):
        """Register an async callback for progress events."""
        self._async_callbacks.append(callback)

    def remove_callback(self, callback: Callable[[ProgressEvent], Any]):
        if callback in self._async_callbacks:
            self._async_callbacks.remove(callback)

    @property
    def latest(self) -> ProgressEvent | None:
        return self.events[-1] if self.events else None

    async def emit(
        self,
        phase: ProgressPhase,
        message: str,
        percent: int | None = None,
        detail: dict[str, Any] | None = None
    ):
        """Emit a progress event to all registered callbacks."""
        # Auto-calculate percent if not provided
        if percent is None:
            self.current_step += 1
            percent = min(99, int((self.current_step / self.total_steps) * 100))

        event = ProgressEvent(
            phase=phase,
            message=message,
            percent=percent,
            detail=detail or {}
        )
        self.events.append(event)

        for callback in list(self._async_callbacks):
            try:
                await callback(event)
            except Exception as e:
                logger.error(f"Async callback error: {e}")

    async def complete(self, message: str = "Complete", detail: dict[str, Any] | None = None):
        """Mark the operation as complete."""
        await self.emit(ProgressPhase.COMPLETE, message, 100, detail)

    async def error(self, message: str):
        """Mark the operation as failed."""
        await self.emit(ProgressPhase.ERROR, message, self.latest.percent if self.latest else 0)

    def close(self):
        """Remove this tracker from the registry."""
        ProgressTracker._active_trackers.pop(self.task_id, None)
