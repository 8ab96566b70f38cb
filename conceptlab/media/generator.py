"""Media generation service for concept art, comic strips and video shots.

Uses Google's Imagen API for still images and Veo for video shots.

Architecture:
- Images come back inline from a single synchronous call
- Video shots are long-running jobs driven by LongRunningJobClient
- Saved assets live flat under Config.MEDIA_DIR
"""

import asyncio
import base64
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from ..concepts import prompts
from ..concepts.reference_data import COMIC_STRIP_STYLES, PANEL_OPTIONS
from ..config import Config
from ..utils.retry import run_with_retry
from .errors import ContentGenerationError, MissingCredentialError
from .jobs import GenerationResult, LongRunningJobClient, ProgressCallback
from .veo import VeoJobService, VideoRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedImage:
    """One generated still."""

    data: bytes
    mime_type: str = "image/jpeg"

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class MediaGenerator:
    """Image/video generation using Google's Imagen + Veo APIs."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        image_model: str | None = None,
        video_model: str | None = None,
        media_dir: Path | None = None,
        client: Any = None,
        job_client: LongRunningJobClient | None = None,
    ):
        """Initialize MediaGenerator.

        Args:
            api_key: Google API key. Falls back to Config.GOOGLE_API_KEY.
            image_model: Imagen model name.
            video_model: Veo model name.
            media_dir: Where save_asset() writes files.
            client: Pre-built genai client (tests).
            job_client: Pre-built job client for video shots (tests).
        """
        self._api_key = api_key or Config.GOOGLE_API_KEY
        self.image_model = image_model or Config.IMAGE_MODEL
        self.video_model = video_model or Config.VIDEO_MODEL
        self.media_dir = Path(media_dir or Config.MEDIA_DIR)
        self._client = client
        self._job_client = job_client

    def _ensure_client(self):
        """Lazy-init the Google GenAI client."""
        if self._client is None:
            if not self._api_key:
                raise MissingCredentialError("GOOGLE_API_KEY environment variable not set")
            from google import genai
            self._client = genai.Client(api_key=self._api_key)

    @property
    def job_client(self) -> LongRunningJobClient:
        if self._job_client is None:
            self._ensure_client()
            service = VeoJobService(self._api_key, self.video_model, client=self._client)
            self._job_client = LongRunningJobClient(
                service,
                api_key=self._api_key,
                poll_interval=Config.VIDEO_POLL_INTERVAL,
                max_polls=Config.VIDEO_MAX_POLLS,
            )
        return self._job_client

    # =====================================================================
    # Stills
    # =====================================================================

    async def generate_images(
        self,
        prompt: str,
        number_of_images: int = 1,
        aspect_ratio: str = "1:1",
    ) -> list[GeneratedImage]:
        """Generate JPEG stills via Imagen.

        Raises:
            ContentGenerationError: the call failed or returned no images.
        """
        self._ensure_client()

        def _generate():
            from google.genai import types
            return self._client.models.generate_images(
                model=self.image_model,
                prompt=prompt,
                config=types.GenerateImagesConfig(
                    number_of_images=number_of_images,
                    output_mime_type="image/jpeg",
                    aspect_ratio=aspect_ratio,
                ),
            )

        try:
            response = await run_with_retry(_generate, f"images:{number_of_images}")
        except Exception as e:
            logger.error(f"Error calling Imagen API: {e}")
            raise ContentGenerationError(
                "Failed to generate image from AI. Please check the logs for details."
            ) from e

        images = [
            GeneratedImage(data=generated.image.image_bytes)
            for generated in (response.generated_images or [])
            if generated.image and generated.image.image_bytes
        ]
        if not images:
            raise ContentGenerationError("Image generation failed: No images were returned.")

        logger.info(f"Generated {len(images)} image(s) with {self.image_model}")
        return images

    async def generate_concept_art(
        self, description: str, number_of_images: int = 1
    ) -> list[GeneratedImage]:
        if not description.strip():
            raise ValueError("Concept art description is required")
        return await self.generate_images(
            prompts.concept_art_prompt(description), number_of_images
        )

    async def generate_comic_strip(
        self, story: str, panels: int, style: str
    ) -> list[GeneratedImage]:
        """One image per panel, all from the same story prompt."""
        if not story.strip():
            raise ValueError("Comic strip story is required")
        if panels not in PANEL_OPTIONS:
            raise ValueError(f"panels must be one of {PANEL_OPTIONS}")
        if style not in COMIC_STRIP_STYLES:
            raise ValueError(f"Unknown comic strip style: {style}")
        return await self.generate_images(
            prompts.comic_strip_prompt(story, panels, style), panels
        )

    # =====================================================================
    # Video
    # =====================================================================

    async def generate_video_shot(
        self,
        description: str,
        on_progress: ProgressCallback,
        cancel_event: asyncio.Event | None = None,
        on_download: ProgressCallback | None = None,
    ) -> GenerationResult:
        """Generate a video shot via Veo; status checks go to ``on_progress``."""
        if not description.strip():
            raise ValueError("Video shot description is required")
        request = VideoRequest(prompt=prompts.video_shot_prompt(description))
        return await self.job_client.generate(
            request, on_progress, cancel_event, on_download=on_download
        )

    # =====================================================================
    # Files
    # =====================================================================

    def _sanitize_name(self, name: str) -> str:
        """Sanitize a name for use in filenames."""
        return re.sub(r"[^a-zA-Z0-9_-]", "_", name.lower().strip())[:50]

    def save_asset(self, data: bytes, name: str, extension: str) -> Path:
        """Write ``data`` under the media directory with a timestamped name."""
        self.media_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        path = self.media_dir / f"{self._sanitize_name(name)}_{timestamp}.{extension.lstrip('.')}"
        path.write_bytes(data)
        logger.info(f"Asset saved: {path}")
        return path
