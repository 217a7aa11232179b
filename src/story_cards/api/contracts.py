"""Typed contracts shared by API handlers and the Python client."""

from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from story_cards.core.render_resolver import StoryRenderBundle
from story_cards.core.story_editing import FontSlot
from story_cards.core.story_schema import FontFamily, HoverTarget, TextColorKey

SECTION_ID_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]{0,119}$")


class ContractModel(BaseModel):
    """Base model config used by all API contracts."""

    model_config = ConfigDict(extra="forbid")


def normalize_section_id(value: str) -> str:
    normalized = value.strip().lower()
    if not SECTION_ID_PATTERN.match(normalized):
        raise ValueError(
            f"section_id must match `{SECTION_ID_PATTERN.pattern}` (lowercase, digits, _ or -)."
        )
    return normalized


class RawStoriesRequest(ContractModel):
    """Persisted cards of any schema revision, as stored by the host page."""

    stories: list[dict[str, Any]] = Field(default_factory=list)


class RawStoriesResponse(ContractModel):
    stories: list[dict[str, Any]]


class SectionStoriesResponse(ContractModel):
    """Normalized collection stored for one page section."""

    section_id: str
    stories: list[dict[str, Any]]
    updated_at_utc: str


class StoryAddedResponse(SectionStoriesResponse):
    story_id: str


class MoveStoryRequest(ContractModel):
    direction: Literal[-1, 1]


class StoryTextPatchRequest(ContractModel):
    """Text edits for one card; rich fields also refresh their plain fallbacks."""

    title: str | None = None
    content: str | None = None
    bullets_text: str | None = Field(default=None, description="One bullet per line.")
    title_rich_text: str | None = None
    body_rich_text: str | None = None
    bullets_rich_text: str | None = None
    show_bullets: bool | None = None
    accent_color: str | None = None

    @field_validator("accent_color")
    @classmethod
    def _strip_color(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None


class ImageLayoutPatch(ContractModel):
    url: str | None = None
    alt_text: str | None = None
    single_corner: bool | None = None
    corner_reversed: bool | None = None
    x: float | None = None
    y: float | None = None
    width: float | None = Field(default=None, description="Percent of the column.")
    height: float | None = Field(default=None, description="Pixels.")


class TextFrameLayoutPatch(ContractModel):
    x: float | None = None
    y: float | None = None
    width: float | None = Field(default=None, description="Percent of the column.")
    min_height: float | None = Field(default=None, description="Pixels.")


class FontPatch(ContractModel):
    family: FontFamily | None = None
    size: float | None = None


class HoverEffectPatch(ContractModel):
    enabled: bool | None = None
    duration: float | None = Field(default=None, description="Milliseconds.")
    shadow_color: str | None = None
    shadow_opacity_percent: float | None = Field(default=None, description="0-100.")
    shadow_blur: float | None = None


class StoryLayoutPatchRequest(ContractModel):
    """Layout and appearance edits for one card; numbers are clamped to editor ranges."""

    image: ImageLayoutPatch | None = None
    text_frame: TextFrameLayoutPatch | None = None
    fonts: dict[FontSlot, FontPatch] = Field(default_factory=dict)
    hover_effects: dict[HoverTarget, HoverEffectPatch] = Field(default_factory=dict)
    text_colors: dict[TextColorKey, str] = Field(default_factory=dict)


class SectionListResponse(ContractModel):
    section_ids: list[str]


class StoriesRenderResponse(ContractModel):
    stories: list[StoryRenderBundle]


class SectionRenderResponse(StoriesRenderResponse):
    section_id: str
