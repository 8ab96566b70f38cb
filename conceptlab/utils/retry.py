"""Exponential back-off for blocking Google GenAI calls."""

import asyncio
import logging
import random
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {503, 429}


def is_retryable(exc: Exception) -> bool:
    """True for overloaded (503) and rate-limited (429) responses."""
    status = getattr(exc, "code", None) or getattr(exc, "status_code", None)
    if status in _RETRYABLE_STATUS_CODES:
        return True
    exc_str = str(exc)
    return any(str(code) in exc_str for code in _RETRYABLE_STATUS_CODES)


async def run_with_retry(
    fn: Callable[[], Any],
    label: str,
    *,
    max_retries: int = 3,
    base_delay: float = 2.0,
) -> Any:
    """Run *fn* in a thread executor with exponential back-off retry.

    Retries on HTTP 503 (overloaded) and 429 (rate-limit) responses
    from the Gemini / Imagen APIs.  Other exceptions propagate immediately.

    Delay schedule (default):  ~2 s → ~4 s → ~8 s  (+ random jitter).
    """
    loop = asyncio.get_running_loop()

    for attempt in range(max_retries + 1):  # 0 … max_retries
        try:
            return await loop.run_in_executor(None, fn)
        except Exception as exc:
            if not is_retryable(exc) or attempt == max_retries:
                raise  # non-retryable or exhausted retries

            delay = base_delay * (2 ** attempt) + random.uniform(0, 1)
            logger.warning(
                "%s: attempt %d/%d failed (%s). "
                "Retrying in %.1f s…",
                label, attempt + 1, max_retries + 1,
                str(exc)[:120], delay,
            )
            await asyncio.sleep(delay)
