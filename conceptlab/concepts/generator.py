"""Structured concept generation (character, plot, style, intel)."""

import logging

from ..llm.google_provider import GeminiJSONProvider
from . import prompts
from .models import (
    CharacterConcept,
    CharacterIntel,
    PlotOutline,
    RawCharacterConcept,
    RawCharacterIntel,
    RawPlotOutline,
    RawVisualStyle,
    VisualStyle,
)

logger = logging.getLogger(__name__)


def _require(value: str, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError(f"{field} is required")
    return value


class ConceptGenerator:
    """Turns a short brief into a typed concept via Gemini JSON mode."""

    def __init__(self, provider: GeminiJSONProvider):
        self.provider = provider

    async def character_concept(self, description: str) -> CharacterConcept:
        description = _require(description, "Character description")
        raw = await self.provider.generate_json(
            prompts.character_concept_prompt(description), RawCharacterConcept
        )
        logger.info(f"Character concept generated: {raw.name}")
        return CharacterConcept(**raw.model_dump())

    async def plot_outline(self, hero: str, villain: str, theme: str) -> PlotOutline:
        hero = _require(hero, "Hero")
        villain = _require(villain, "Villain")
        theme = _require(theme, "Theme")
        raw = await self.provider.generate_json(
            prompts.plot_outline_prompt(hero, villain, theme), RawPlotOutline
        )
        logger.info(f"Plot outlines generated: {len(raw.outlines)} for {hero} vs {villain}")
        return PlotOutline(**raw.model_dump())

    async def visual_style(self, description: str) -> VisualStyle:
        description = _require(description, "Style description")
        raw = await self.provider.generate_json(
            prompts.visual_style_prompt(description), RawVisualStyle
        )
        logger.info(f"Visual style generated: {raw.style_name}")
        return VisualStyle(**raw.model_dump())

    async def character_intel(self, character_name: str) -> CharacterIntel:
        character_name = _require(character_name, "Character name")
        raw = await self.provider.generate_json(
            prompts.character_intel_prompt(character_name), RawCharacterIntel
        )
        logger.info(f"Intel briefing generated: {raw.character_name}")
        return CharacterIntel(**raw.model_dump())
