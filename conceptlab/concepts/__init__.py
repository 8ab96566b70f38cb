"""Structured concept generation and export."""

from .export import render_blueprint
from .generator import ConceptGenerator
from .models import (
    CharacterConcept,
    CharacterIntel,
    GeneratedConcept,
    PlotOutline,
    SinglePlotOutline,
    VisualStyle,
)

__all__ = [
    "CharacterConcept",
    "CharacterIntel",
    "ConceptGenerator",
    "GeneratedConcept",
    "PlotOutline",
    "SinglePlotOutline",
    "VisualStyle",
    "render_blueprint",
]
