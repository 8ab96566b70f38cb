"""Veo video jobs on top of the google-genai SDK.

``generate_videos`` returns an operation immediately; the video itself is
ready once ``operations.get`` reports the operation done. The SDK is
synchronous, so every call runs in the default executor.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from .errors import JobFailedError, MissingCredentialError
from .jobs import JobHandle, JobStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VideoRequest:
    """Submission payload for one Veo job."""

    prompt: str
    aspect_ratio: str = "16:9"
    number_of_videos: int = 1


class VeoJobService:
    """JobService backed by Google's Veo API."""

    def __init__(self, api_key: str | None, model: str, client: Any = None):
        self._api_key = api_key
        self.model = model
        self._client = client

    def _ensure_client(self):
        """Lazy-init the Google GenAI client."""
        if self._client is None:
            if not self._api_key:
                raise MissingCredentialError("GOOGLE_API_KEY environment variable not set")
            from google import genai
            self._client = genai.Client(api_key=self._api_key)

    async def submit(self, payload: VideoRequest) -> JobHandle:
        """Start the Veo generation job."""
        self._ensure_client()
        loop = asyncio.get_running_loop()

        def _start_generation():
            from google.genai import types
            return self._client.models.generate_videos(
                model=self.model,
                prompt=payload.prompt,
                config=types.GenerateVideosConfig(
                    aspect_ratio=payload.aspect_ratio,
                    number_of_videos=payload.number_of_videos,
                ),
            )

        logger.info(f"Starting Veo generation ({self.model})...")
        operation = await loop.run_in_executor(None, _start_generation)
        return JobHandle(name=operation.name or "", operation=operation)

    async def check(self, handle: JobHandle) -> JobStatus:
        """Refresh the operation and map it onto a JobStatus."""
        self._ensure_client()
        loop = asyncio.get_running_loop()
        operation = await loop.run_in_executor(
            None, lambda: self._client.operations.get(handle.operation)
        )

        if not operation.done:
            return JobStatus.pending()

        if operation.error:
            message = _error_message(operation.error)
            raise JobFailedError(f"Video generation failed: {message}")

        response = operation.response or operation.result
        videos = getattr(response, "generated_videos", None) if response else None
        if not videos or not videos[0].video or not videos[0].video.uri:
            raise JobFailedError("Video generation finished but returned no video.")

        return JobStatus.completed(videos[0].video.uri)


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        return error.get("message") or str(error)
    return getattr(error, "message", None) or str(error)
