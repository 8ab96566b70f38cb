"""
Shared test fixtures for the conceptlab test suite.

Provides:
- FakeJobService: scripted job service (no network, no API keys)
- MultiJobService: several scripted jobs on one service
- RecordingSleep: stand-in for asyncio.sleep that records delays
- make_http_client: httpx.AsyncClient over a MockTransport
- Fake genai client for text and image calls
"""

import asyncio
import os
from collections import deque
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

# Set test environment BEFORE any conceptlab imports
os.environ.setdefault("GOOGLE_API_KEY", "test-key")

from conceptlab.media.jobs import JobHandle, JobStatus
from conceptlab.progress import ProgressTracker

# ---------------------------------------------------------------------------
# FakeJobService — scripted upstream
# ---------------------------------------------------------------------------

class FakeJobService:
    """Job service whose status checks follow a script.

    Usage:
        service = FakeJobService(handle_name="H1")
        service.done_on_check(5, locator="https://example.test/video?alt=media")
    """

    def __init__(self, handle_name: str = "H1"):
        self.handle_name = handle_name
        self.submitted: list[Any] = []
        self.checks: list[JobHandle] = []
        self._statuses: deque = deque()
        self.submit_error: Exception | None = None

    def done_on_check(self, check_number: int, locator: str):
        self._statuses.extend([JobStatus.pending()] * (check_number - 1))
        self._statuses.append(JobStatus.completed(locator))

    def fail_on_check(self, check_number: int, error: Exception):
        self._statuses.extend([JobStatus.pending()] * (check_number - 1))
        self._statuses.append(error)

    async def submit(self, payload: Any) -> JobHandle:
        if self.submit_error is not None:
            raise self.submit_error
        self.submitted.append(payload)
        return JobHandle(name=self.handle_name)

    async def check(self, handle: JobHandle) -> JobStatus:
        self.checks.append(handle)
        if not self._statuses:
            return JobStatus.pending()  # never finishes
        status = self._statuses.popleft()
        if isinstance(status, Exception):
            raise status
        return status


class MultiJobService:
    """Job service that runs several scripted jobs side by side.

    Each submitted payload is matched to its job by ``payload["prompt"]``.
    """

    def __init__(self):
        self.checks: list[JobHandle] = []
        self._names: dict[str, str] = {}
        self._statuses: dict[str, deque] = {}

    def script(self, name: str, *, prompt: str, done_on_check: int, locator: str):
        self._names[prompt] = name
        self._statuses[name] = deque(
            [JobStatus.pending()] * (done_on_check - 1) + [JobStatus.completed(locator)]
        )

    async def submit(self, payload: Any) -> JobHandle:
        return JobHandle(name=self._names[payload["prompt"]])

    async def check(self, handle: JobHandle) -> JobStatus:
        self.checks.append(handle)
        await asyncio.sleep(0)
        return self._statuses[handle.name].popleft()


class RecordingSleep:
    """Awaitable replacement for asyncio.sleep."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)

    @property
    def total(self) -> float:
        return sum(self.delays)


def make_http_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by ``handler(request)``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def fake_genai_text_client(text: str) -> MagicMock:
    """genai.Client stand-in whose generate_content returns ``text``."""
    client = MagicMock()
    client.models.generate_content.return_value = SimpleNamespace(text=text)
    return client


def fake_genai_image_client(*payloads: bytes) -> MagicMock:
    """genai.Client stand-in whose generate_images returns ``payloads``."""
    client = MagicMock()
    client.models.generate_images.return_value = SimpleNamespace(
        generated_images=[
            SimpleNamespace(image=SimpleNamespace(image_bytes=data)) for data in payloads
        ]
    )
    return client


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_service():
    return FakeJobService()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def progress_messages():
    """List plus a sync on_progress callback appending to it."""
    messages: list[str] = []
    return messages, messages.append


@pytest.fixture(autouse=True)
def clear_trackers():
    yield
    ProgressTracker._active_trackers.clear()
