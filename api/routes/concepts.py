"""Structured concept routes (character, plot, style, intel) and exports."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from conceptlab.concepts import (
    CharacterConcept,
    CharacterIntel,
    ConceptGenerator,
    PlotOutline,
    VisualStyle,
    render_blueprint,
)
from conceptlab.config import Config
from conceptlab.llm import GeminiJSONProvider

from .models import CharacterRequest, ExportRequest, IntelRequest, PlotRequest, StyleRequest

logger = logging.getLogger(__name__)

router = APIRouter()

_generator: ConceptGenerator | None = None


def get_concept_generator() -> ConceptGenerator:
    """Shared ConceptGenerator built from Config on first use."""
    global _generator
    if _generator is None:
        provider = GeminiJSONProvider(Config.require_api_key(), model=Config.TEXT_MODEL)
        _generator = ConceptGenerator(provider)
    return _generator


def reset_concept_generator():
    global _generator
    _generator = None


@router.post("/character", response_model=CharacterConcept)
async def generate_character(
    request: CharacterRequest,
    generator: ConceptGenerator = Depends(get_concept_generator),
):
    """Generate an original character concept from a short pitch."""
    return await generator.character_concept(request.description)


@router.post("/plot", response_model=PlotOutline)
async def generate_plot(
    request: PlotRequest,
    generator: ConceptGenerator = Depends(get_concept_generator),
):
    """Generate three episode outlines for a hero, villain and theme."""
    return await generator.plot_outline(request.hero, request.villain, request.theme)


@router.post("/style", response_model=VisualStyle)
async def generate_style(
    request: StyleRequest,
    generator: ConceptGenerator = Depends(get_concept_generator),
):
    return await generator.visual_style(request.description)


@router.post("/intel", response_model=CharacterIntel)
async def generate_intel(
    request: IntelRequest,
    generator: ConceptGenerator = Depends(get_concept_generator),
):
    return await generator.character_intel(request.character_name)


@router.post("/export", response_class=PlainTextResponse)
async def export_concept(concept: ExportRequest):
    """Render a concept as a downloadable text blueprint."""
    filename, text = render_blueprint(concept)
    return PlainTextResponse(
        text,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
