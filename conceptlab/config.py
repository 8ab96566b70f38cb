"""Configuration management for conceptlab."""

import os
from pathlib import Path

from dotenv import load_dotenv

from .media.errors import MissingCredentialError


# Load environment variables from .env file
def _find_env_file() -> Path | None:
    """Find the .env file, searching up the directory tree."""
    current = Path(__file__).parent
    for _ in range(5):  # Search up to 5 levels
        env_path = current / ".env"
        if env_path.exists():
            return env_path
        current = current.parent
    return None


_env_file = _find_env_file()
if _env_file:
    load_dotenv(_env_file)

PROJECT_ROOT = Path(__file__).parent.parent


class Config:
    """Application configuration from environment variables."""

    # Google GenAI credential (API_KEY kept for older .env files)
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "") or os.getenv("API_KEY", "")

    # Models
    TEXT_MODEL: str = os.getenv("TEXT_MODEL", "gemini-2.5-flash")
    IMAGE_MODEL: str = os.getenv("IMAGE_MODEL", "imagen-3.0-generate-002")
    VIDEO_MODEL: str = os.getenv("VIDEO_MODEL", "veo-2.0-generate-001")

    # Video job polling: 30 checks x 10s = 5 minutes
    VIDEO_POLL_INTERVAL: float = float(os.getenv("VIDEO_POLL_INTERVAL", "10"))
    VIDEO_MAX_POLLS: int = int(os.getenv("VIDEO_MAX_POLLS", "30"))

    # Generated assets
    MEDIA_DIR: Path = Path(os.getenv("MEDIA_DIR", str(PROJECT_ROOT / "data" / "media")))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> list[str]:
        """Validate configuration, return list of issues."""
        issues = []

        if not cls.GOOGLE_API_KEY:
            issues.append("No Google API key configured. Set GOOGLE_API_KEY in .env")
        if cls.VIDEO_POLL_INTERVAL <= 0:
            issues.append("VIDEO_POLL_INTERVAL must be positive")
        if cls.VIDEO_MAX_POLLS < 1:
            issues.append("VIDEO_MAX_POLLS must be at least 1")

        return issues

    @classmethod
    def require_api_key(cls) -> str:
        """Return the API key or fail loudly on first use."""
        if not cls.GOOGLE_API_KEY:
            raise MissingCredentialError(
                "GOOGLE_API_KEY environment variable not set"
            )
        return cls.GOOGLE_API_KEY
