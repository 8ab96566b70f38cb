"""Pydantic models for the structured generation modes.

Field names serialize in camelCase (``visualDescription``, ``plotPoints``)
because that is the shape the UI and the JSON schema sent to Gemini use.
The ``type`` discriminator is filled in locally, never asked of the model.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# === Raw shapes (what Gemini is asked to return) ===

class RawCharacterConcept(_CamelModel):
    name: str = Field(description="A creative and fitting name for the character.")
    backstory: str = Field(description="A compelling 2-3 paragraph origin story.")
    powers: list[str] = Field(description="A list of unique powers and abilities.")
    weaknesses: list[str] = Field(
        description="A list of meaningful weaknesses or vulnerabilities that create conflict."
    )
    visual_description: str = Field(
        description="A detailed description for concept art, including costume and appearance."
    )


class SinglePlotOutline(_CamelModel):
    title: str = Field(description="A catchy title for the episode outline.")
    plot_points: list[str] = Field(
        description="A list of three key plot points for the story (e.g., beginning, middle, end)."
    )


class RawPlotOutline(_CamelModel):
    outlines: list[SinglePlotOutline] = Field(
        description="An array of three distinct episode plot outlines."
    )


class RawVisualStyle(_CamelModel):
    style_name: str = Field(description="A catchy name for this visual style.")
    aesthetic: str = Field(description="The overall aesthetic and mood.")
    character_design: str = Field(description="The approach to designing characters.")
    color_palette: str = Field(description="The primary color scheme and its purpose.")
    background_style: str = Field(description="The style for backgrounds and environments.")


class RawCharacterIntel(_CamelModel):
    character_name: str = Field(description="The character's primary name.")
    aliases: list[str] = Field(description="Known aliases and code names.")
    base_of_operations: str = Field(description="Where the character operates from.")
    abilities: list[str] = Field(description="An assessment of powers, skills and resources.")
    psychological_profile: str = Field(
        description="Motivations, temperament and behavioral patterns."
    )
    weaknesses: list[str] = Field(description="Exploitable weaknesses.")


# === Typed concepts (what the rest of the app handles) ===

class CharacterConcept(RawCharacterConcept):
    type: Literal["character"] = "character"


class PlotOutline(RawPlotOutline):
    type: Literal["plot"] = "plot"


class VisualStyle(RawVisualStyle):
    type: Literal["style"] = "style"


class CharacterIntel(RawCharacterIntel):
    type: Literal["intel"] = "intel"


GeneratedConcept = CharacterConcept | PlotOutline | VisualStyle | CharacterIntel
