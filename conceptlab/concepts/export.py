"""Plain-text blueprint files for generated concepts."""

import re

from .models import CharacterConcept, CharacterIntel, GeneratedConcept, PlotOutline, VisualStyle


def _slug(name: str) -> str:
    return re.sub(r"\s+", "_", name)


def _bullets(items: list[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def render_blueprint(concept: GeneratedConcept) -> tuple[str, str]:
    """Return ``(filename, text)`` for a concept's downloadable blueprint."""
    if isinstance(concept, CharacterConcept):
        return (
            f"character-{_slug(concept.name)}.txt",
            f"Character Blueprint: {concept.name}\n\n"
            f"== BACKSTORY ==\n{concept.backstory}\n\n"
            f"== POWERS & ABILITIES ==\n{_bullets(concept.powers)}\n\n"
            f"== WEAKNESSES ==\n{_bullets(concept.weaknesses)}\n\n"
            f"== VISUAL DESCRIPTION ==\n{concept.visual_description}",
        )

    if isinstance(concept, PlotOutline):
        text = "Episode Plot Outlines\n\n"
        for index, outline in enumerate(concept.outlines, start=1):
            text += f"== OUTLINE {index}: {outline.title} ==\n"
            text += f"{_bullets(outline.plot_points)}\n\n"
        return "plot-outlines.txt", text

    if isinstance(concept, VisualStyle):
        return (
            f"style-guide-{_slug(concept.style_name)}.txt",
            f"Visual Style Guide: {concept.style_name}\n\n"
            f"== OVERALL AESTHETIC ==\n{concept.aesthetic}\n\n"
            f"== CHARACTER DESIGN ==\n{concept.character_design}\n\n"
            f"== COLOR PALETTE ==\n{concept.color_palette}\n\n"
            f"== BACKGROUND & ENVIRONMENT STYLE ==\n{concept.background_style}",
        )

    if isinstance(concept, CharacterIntel):
        return (
            f"intel-briefing-{_slug(concept.character_name)}.txt",
            f"INTELLIGENCE BRIEFING: {concept.character_name.upper()}\n\n"
            f"KNOWN ALIASES: {', '.join(concept.aliases)}\n"
            f"BASE OF OPERATIONS: {concept.base_of_operations}\n\n"
            f"== ABILITIES ASSESSMENT ==\n{_bullets(concept.abilities)}\n\n"
            f"== PSYCHOLOGICAL PROFILE ==\n{concept.psychological_profile}\n\n"
            f"== EXPLOITABLE WEAKNESSES ==\n{_bullets(concept.weaknesses)}",
        )

    raise TypeError(f"Cannot export concept of type {type(concept).__name__}")
