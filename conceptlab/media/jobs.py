"""Client for long-running generation jobs (submit, poll, download).

A video job is not available synchronously: the service hands back a job
handle, and the result only exists once a status check reports it done.

    client = LongRunningJobClient(service, api_key=Config.require_api_key())
    result = await client.generate(VideoRequest(prompt="..."), on_progress=print)

Polling is bounded. The client checks at most ``max_polls`` times, waiting
``poll_interval`` seconds between checks, and emits one progress message per
wait. Only "not done yet" is retried; any other failure aborts the call.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from .errors import (
    DownloadError,
    GenerationError,
    JobCancelledError,
    JobTimeoutError,
    MissingCredentialError,
    SubmissionError,
    TransportError,
)

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 10.0
DEFAULT_MAX_POLLS = 30

FLAVOR_MESSAGES: tuple[str, ...] = (
    "Rendering the opening frames...",
    "Choreographing the action...",
    "Adjusting the cinematic lighting...",
    "Compositing the visual effects...",
    "Syncing the camera moves...",
    "Polishing the final cut...",
)

DOWNLOAD_MESSAGE = "Downloading final asset..."

ProgressCallback = Callable[[str], Awaitable[None] | None]


@dataclass(frozen=True)
class JobHandle:
    """Reference to a submitted job, valid for one generate() call."""

    name: str
    operation: Any = None


@dataclass(frozen=True)
class JobStatus:
    """Result of one status check: pending, or done with a result locator."""

    done: bool
    locator: str | None = None

    @classmethod
    def pending(cls) -> "JobStatus":
        return cls(done=False)

    @classmethod
    def completed(cls, locator: str) -> "JobStatus":
        return cls(done=True, locator=locator)


@dataclass(frozen=True)
class GenerationResult:
    """The downloaded asset."""

    data: bytes
    content_type: str
    locator: str


class JobService(Protocol):
    """Upstream service that runs generation jobs."""

    async def submit(self, payload: Any) -> JobHandle:
        ...

    async def check(self, handle: JobHandle) -> JobStatus:
        ...


def progress_message(
    iteration: int,
    max_polls: int,
    flavor_messages: Sequence[str] = FLAVOR_MESSAGES,
) -> str:
    """Progress text shown after the given poll iteration."""
    flavor = flavor_messages[iteration % len(flavor_messages)]
    return f"{flavor} (Status check {iteration}/{max_polls})"


class LongRunningJobClient:
    """Drives one job from submission to downloaded bytes per generate() call.

    The client holds no per-job state, so concurrent generate() calls on the
    same instance are independent.
    """

    def __init__(
        self,
        service: JobService,
        api_key: str | None,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        max_polls: int = DEFAULT_MAX_POLLS,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        flavor_messages: Sequence[str] = FLAVOR_MESSAGES,
    ):
        """Initialize the client.

        Args:
            service: Job service that accepts submissions and status checks.
            api_key: Credential appended to the result locator on download.
            poll_interval: Seconds to wait between status checks.
            max_polls: Maximum number of status checks before timing out.
            http_client: Optional shared client for the download (not closed here).
            sleep: Awaitable delay; swapped out in tests.
            flavor_messages: Rotating texts used for progress messages.
        """
        if max_polls < 1:
            raise ValueError("max_polls must be at least 1")
        if not flavor_messages:
            raise ValueError("flavor_messages must not be empty")
        self._service = service
        self._api_key = api_key
        self.poll_interval = poll_interval
        self.max_polls = max_polls
        self._http_client = http_client
        self._sleep = sleep
        self._flavor_messages = tuple(flavor_messages)

    async def submit(self, payload: Any) -> JobHandle:
        """Send the generation request and return its job handle."""
        try:
            handle = await self._service.submit(payload)
        except SubmissionError:
            raise
        except Exception as exc:
            raise SubmissionError(f"Failed to submit generation job: {exc}") from exc
        logger.info(f"Submitted generation job {handle.name}")
        return handle

    async def poll_until_complete(
        self,
        handle: JobHandle,
        on_progress: ProgressCallback,
        cancel_event: asyncio.Event | None = None,
    ) -> str:
        """Check the job until it is done and return its result locator.

        Raises:
            JobTimeoutError: ``max_polls`` checks without completion.
            JobCancelledError: ``cancel_event`` was set before a check.
            TransportError: a status check failed.
        """
        iteration = 0
        while iteration < self.max_polls:
            if cancel_event is not None and cancel_event.is_set():
                logger.info(f"Job {handle.name} cancelled after {iteration} checks")
                raise JobCancelledError("Video generation was cancelled.")

            status = await self._check(handle)
            if status.done:
                logger.info(f"Job {handle.name} done after {iteration + 1} checks")
                return status.locator

            await self._sleep(self.poll_interval)
            iteration += 1
            await self._notify(
                on_progress,
                progress_message(iteration, self.max_polls, self._flavor_messages),
            )

        logger.warning(f"Job {handle.name} not done after {self.max_polls} checks")
        raise JobTimeoutError(self.max_polls, self.poll_interval)

    async def resolve_result(self, locator: str) -> GenerationResult:
        """Download the finished asset behind ``locator``."""
        if not self._api_key:
            raise MissingCredentialError(
                "API key is not configured; cannot download the generated asset."
            )

        if self._http_client is not None:
            return await self._fetch(self._http_client, locator)
        async with httpx.AsyncClient(follow_redirects=True) as client:
            return await self._fetch(client, locator)

    async def generate(
        self,
        payload: Any,
        on_progress: ProgressCallback,
        cancel_event: asyncio.Event | None = None,
        on_download: ProgressCallback | None = None,
    ) -> GenerationResult:
        """Submit, poll and download one job. The first failure propagates.

        ``on_progress`` only receives status-check messages. ``on_download``,
        if given, is told once with ``DOWNLOAD_MESSAGE`` before the fetch.
        """
        handle = await self.submit(payload)
        locator = await self.poll_until_complete(handle, on_progress, cancel_event)
        if on_download is not None:
            await self._notify(on_download, DOWNLOAD_MESSAGE)
        return await self.resolve_result(locator)

    async def _check(self, handle: JobHandle) -> JobStatus:
        try:
            status = await self._service.check(handle)
        except GenerationError:
            raise
        except Exception as exc:
            raise TransportError(f"Status check for job {handle.name} failed: {exc}") from exc
        logger.debug(f"Job {handle.name} status: done={status.done}")
        return status

    def _authorized_url(self, locator: str) -> httpx.URL:
        # Keep the locator's own query (e.g. alt=media) and add the key to it
        return httpx.URL(locator).copy_add_param("key", self._api_key)

    async def _fetch(self, client: httpx.AsyncClient, locator: str) -> GenerationResult:
        try:
            response = await client.get(
                self._authorized_url(locator), follow_redirects=True
            )
        except httpx.HTTPError as exc:
            raise DownloadError(f"Failed to download generated asset: {exc}") from exc

        if not response.is_success:
            raise DownloadError(
                f"Failed to download generated asset (HTTP {response.status_code}).",
                status_code=response.status_code,
            )

        content_type = response.headers.get("content-type", "application/octet-stream")
        logger.info(f"Downloaded {len(response.content)} bytes ({content_type})")
        return GenerationResult(
            data=response.content,
            content_type=content_type,
            locator=locator,
        )

    @staticmethod
    async def _notify(on_progress: ProgressCallback, message: str) -> None:
        result = on_progress(message)
        if inspect.isawaitable(result):
            await result
