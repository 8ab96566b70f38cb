"""Pydantic request/response models for the conceptlab API."""

from typing import Annotated, Optional

from fastapi import Body
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from conceptlab.concepts.models import GeneratedConcept


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# === Concept Requests ===

class CharacterRequest(_CamelModel):
    description: str


class PlotRequest(_CamelModel):
    hero: str
    villain: str
    theme: str


class StyleRequest(_CamelModel):
    description: str


class IntelRequest(_CamelModel):
    character_name: str


ExportRequest = Annotated[GeneratedConcept, Body(discriminator="type")]


# === Media Requests ===

class ConceptArtRequest(_CamelModel):
    prompt: str
    number_of_images: int = Field(default=1, ge=1, le=4)


class ComicStripRequest(_CamelModel):
    story: str
    panels: int = 2
    style: str = "Classic Comic"


class VideoShotRequest(_CamelModel):
    prompt: str


# === Media Responses ===

class ImagesResponse(_CamelModel):
    images: list[str]  # data:image/jpeg;base64,... URLs


class VideoJobResponse(_CamelModel):
    task_id: str
    message: str


class VideoJobStatus(_CamelModel):
    task_id: str
    status: str  # running | complete | error
    latest_event: Optional[dict] = None
    event_count: int = 0
