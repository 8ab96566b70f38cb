"""
Logging setup for conceptlab.

setup_logging() runs once, from the FastAPI lifespan handler or from
run_server.py; modules log through ``logging.getLogger(__name__)``.

What each level carries here:
  DEBUG   – per-check job status in media.jobs
  INFO    – job submitted/done and bytes downloaded, assets saved to MEDIA_DIR
  WARNING – 429/503 retries, config issues at startup, polls running out
  ERROR   – failed Gemini/Imagen calls, failed background video jobs,
            GenerationError responses from the API
"""

import logging
import sys

# SDK and HTTP transport chatter drowns out job progress at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "google_genai", "uvicorn.access")


def setup_logging(level: str = "INFO") -> None:
    """Send conceptlab logs to stdout at ``level`` (a logging level name)."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="[%(name)s] %(message)s",
        stream=sys.stdout,
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
