"""Error taxonomy for generation calls.

Every failure of a generation call surfaces as one of these. The message is
meant for humans (the UI shows it verbatim); extra fields are for diagnostics.
"""


class GenerationError(Exception):
    """Base class for all generation failures."""


class SubmissionError(GenerationError):
    """The job service rejected the submission or could not be reached."""


class TransportError(GenerationError):
    """Unexpected failure while talking to the job service (not retried)."""


class JobTimeoutError(GenerationError, TimeoutError):
    """The poll cap was reached before the job reported completion."""

    def __init__(self, polls: int, poll_interval: float):
        self.polls = polls
        self.poll_interval = poll_interval
        super().__init__(
            f"Video generation timed out after {_format_duration(polls * poll_interval)}."
        )


class JobCancelledError(GenerationError):
    """The caller cancelled the job before it completed."""


class JobFailedError(GenerationError):
    """The job finished upstream but produced an error or no asset."""


class MissingCredentialError(GenerationError):
    """No API key is configured for a call that needs one."""


class DownloadError(GenerationError):
    """Fetching the finished asset did not succeed."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ContentGenerationError(GenerationError):
    """A text or image generation call failed."""


def _format_duration(seconds: float) -> str:
    if seconds >= 60 and seconds % 60 == 0:
        minutes = int(seconds // 60)
        return f"{minutes} minute{'s' if minutes != 1 else ''}"
    if seconds == int(seconds):
        seconds = int(seconds)
    return f"{seconds} second{'s' if seconds != 1 else ''}"
