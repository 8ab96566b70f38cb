"""FastAPI main application for conceptlab."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from conceptlab import __version__
from conceptlab.concepts.reference_data import get_options
from conceptlab.config import Config
from conceptlab.logging_config import setup_logging
from conceptlab.media.errors import (
    GenerationError,
    JobCancelledError,
    JobTimeoutError,
    MissingCredentialError,
)

from .routes import concepts, media

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    setup_logging(Config.LOG_LEVEL)
    for issue in Config.validate():
        logger.warning(f"Config: {issue}")
    logger.info("conceptlab starting up")
    yield
    concepts.reset_concept_generator()
    media.reset_media_generator()
    logger.info("conceptlab shut down cleanly")


app = FastAPI(
    title="conceptlab API",
    description="Character, story and media concept generation on Google GenAI",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware for web frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(concepts.router, prefix="/api/concepts", tags=["Concepts"])
app.include_router(media.router, prefix="/api/media", tags=["Media"])


# Most specific first
_ERROR_STATUS = (
    (MissingCredentialError, 503),
    (JobTimeoutError, 504),
    (JobCancelledError, 409),
    (GenerationError, 502),
)


@app.exception_handler(GenerationError)
async def generation_error_handler(request: Request, exc: GenerationError):
    status_code = next(code for cls, code in _ERROR_STATUS if isinstance(exc, cls))
    logger.error(f"{request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.get("/api/options")
async def list_options():
    """Pick lists for the generation forms."""
    return get_options()

