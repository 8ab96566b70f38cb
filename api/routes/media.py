"""Media routes: stills, video shot jobs with SSE progress, file serving."""

import asyncio
import json
import logging
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse, StreamingResponse

from conceptlab.config import Config
from conceptlab.media.generator import MediaGenerator
from conceptlab.progress import ProgressEvent, ProgressPhase, ProgressTracker
from conceptlab.utils.tasks import safe_create_task

from .models import (
    ComicStripRequest,
    ConceptArtRequest,
    ImagesResponse,
    VideoJobResponse,
    VideoJobStatus,
    VideoShotRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Finished trackers stay readable for this long
TRACKER_RETENTION_SECONDS = 600

# MIME types by extension
MIME_MAP = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".mp4": "video/mp4",
}

_generator: MediaGenerator | None = None

# Cancel switches for running video jobs
_cancel_events: dict[str, asyncio.Event] = {}


def get_media_generator() -> MediaGenerator:
    """Shared MediaGenerator built from Config on first use."""
    global _generator
    if _generator is None:
        _generator = MediaGenerator(Config.require_api_key())
    return _generator


def reset_media_generator():
    global _generator
    _generator = None


# =====================================================================
# Stills
# =====================================================================

@router.post("/concept-art", response_model=ImagesResponse)
async def generate_concept_art(
    request: ConceptArtRequest,
    generator: MediaGenerator = Depends(get_media_generator),
):
    images = await generator.generate_concept_art(request.prompt, request.number_of_images)
    return ImagesResponse(images=[image.to_data_url() for image in images])


@router.post("/comic-strip", response_model=ImagesResponse)
async def generate_comic_strip(
    request: ComicStripRequest,
    generator: MediaGenerator = Depends(get_media_generator),
):
    images = await generator.generate_comic_strip(request.story, request.panels, request.style)
    return ImagesResponse(images=[image.to_data_url() for image in images])


# =====================================================================
# Video shots (long-running)
# =====================================================================

@router.post("/video-shot", response_model=VideoJobResponse)
async def start_video_shot(
    request: VideoShotRequest,
    generator: MediaGenerator = Depends(get_media_generator),
):
    """Start a video shot job and return a task ID for progress tracking."""
    if not request.prompt.strip():
        raise HTTPException(status_code=422, detail="Video shot description is required")

    # submit + every poll + download
    tracker = ProgressTracker(total_steps=Config.VIDEO_MAX_POLLS + 2)
    task_id = tracker.task_id
    cancel_event = asyncio.Event()
    _cancel_events[task_id] = cancel_event

    await tracker.emit(ProgressPhase.SUBMITTED, "Initiating video generation...", 0)

    async def on_progress(message: str):
        await tracker.emit(ProgressPhase.POLLING, message)

    async def on_download(message: str):
        await tracker.emit(ProgressPhase.DOWNLOADING, message)

    async def run_video_job():
        try:
            result = await generator.generate_video_shot(
                request.prompt, on_progress, cancel_event, on_download=on_download
            )
            path = generator.save_asset(result.data, "video_shot", "mp4")
            await tracker.complete(
                "Video shot ready",
                detail={"url": f"/api/media/files/{path.name}", "filename": "video-shot.mp4"},
            )
        except asyncio.CancelledError:
            await tracker.error("Video generation was interrupted.")
            raise
        except Exception as e:
            await tracker.error(str(e))
            raise
        finally:
            _cancel_events.pop(task_id, None)
            asyncio.get_running_loop().call_later(TRACKER_RETENTION_SECONDS, tracker.close)

    safe_create_task(run_video_job(), name=f"video_shot:{task_id}")

    return VideoJobResponse(task_id=task_id, message="Video generation started")


@router.delete("/video-shot/{task_id}")
async def cancel_video_shot(task_id: str):
    """Request cancellation; takes effect before the job's next status check."""
    cancel_event = _cancel_events.get(task_id)
    if cancel_event is None:
        raise HTTPException(status_code=404, detail="Task not found or already finished")
    cancel_event.set()
    return {"task_id": task_id, "status": "cancelling"}


@router.get("/progress/{task_id}")
async def stream_progress(task_id: str):
    """Stream progress events for a video job via SSE."""
    tracker = ProgressTracker.get(task_id)
    if not tracker:
        raise HTTPException(status_code=404, detail="Task not found")

    async def event_generator():
        """Generate SSE events from progress updates."""
        yield ": connected\n\n"

        queue: asyncio.Queue[ProgressEvent] = asyncio.Queue()

        async def on_event(event: ProgressEvent):
            await queue.put(event)

        # Snapshot and subscribe without yielding in between so nothing is lost
        existing = list(tracker.events)
        tracker.on_progress_async(on_event)
        try:
            for event in existing:
                yield f"event: progress\ndata: {json.dumps(event.to_dict())}\n\n"
            if existing and existing[-1].is_terminal:
                return

            while True:
                try:
                    event = await asyncio.wait_for(queue.get(), timeout=60.0)
                except asyncio.TimeoutError:
                    yield ": keepalive\n\n"
                    continue
                yield f"event: progress\ndata: {json.dumps(event.to_dict())}\n\n"
                if event.is_terminal:
                    break
        finally:
            tracker.remove_callback(on_event)

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no"
        }
    )


@router.get("/status/{task_id}", response_model=VideoJobStatus)
async def get_video_status(task_id: str):
    """Get current status of a video job."""
    tracker = ProgressTracker.get(task_id)
    if not tracker:
        raise HTTPException(status_code=404, detail="Task not found")

    latest = tracker.latest
    status = "running"
    if latest and latest.phase == ProgressPhase.COMPLETE:
        status = "complete"
    elif latest and latest.phase == ProgressPhase.ERROR:
        status = "error"

    return VideoJobStatus(
        task_id=task_id,
        status=status,
        latest_event=latest.to_dict() if latest else None,
        event_count=len(tracker.events),
    )


# =====================================================================
# Saved files
# =====================================================================

@router.get("/files/{filename}")
async def serve_media(filename: str):
    """Serve a saved asset from the media directory."""
    media_dir = Path(Config.MEDIA_DIR).resolve()
    file_path = (media_dir / filename).resolve()

    # Prevent path traversal
    if file_path.parent != media_dir:
        raise HTTPException(status_code=403, detail="Access denied")
    if not file_path.is_file():
        raise HTTPException(status_code=404, detail="Media not found")

    return FileResponse(
        path=str(file_path),
        media_type=MIME_MAP.get(file_path.suffix.lower(), "application/octet-stream"),
        headers={"Cache-Control": "public, max-age=86400"},  # assets are immutable
    )
