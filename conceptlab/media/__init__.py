"""Media generation: images, and long-running video jobs."""

from .errors import (
    ContentGenerationError,
    DownloadError,
    GenerationError,
    JobCancelledError,
    JobFailedError,
    JobTimeoutError,
    MissingCredentialError,
    SubmissionError,
    TransportError,
)
from .jobs import (
    GenerationResult,
    JobHandle,
    JobService,
    JobStatus,
    LongRunningJobClient,
    progress_message,
)

__all__ = [
    "ContentGenerationError",
    "DownloadError",
    "GenerationError",
    "GenerationResult",
    "JobCancelledError",
    "JobFailedError",
    "JobHandle",
    "JobService",
    "JobStatus",
    "JobTimeoutError",
    "LongRunningJobClient",
    "MissingCredentialError",
    "SubmissionError",
    "TransportError",
    "progress_message",
]
