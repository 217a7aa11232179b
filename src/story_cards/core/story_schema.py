"""Versioned story card schema, legacy normalization and seeded defaults."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from story_cards.core.rich_text import list_to_html, to_paragraph

logger = logging.getLogger(__name__)

FontFamily = Literal["sans", "montserrat"]
HoverTarget = Literal["text", "image"]
TextColorKey = Literal["title", "body", "bullets"]

HOVER_TARGETS: Final[tuple[HoverTarget, ...]] = ("text", "image")
DEFAULT_TEXT_COLORS: Final[dict[str, str]] = {
    "title": "#041c3d",
    "body": "#667085",
    "bullets": "#1c2c4d",
}
DEFAULT_ACCENT_COLOR: Final = "#f26c2b"


class CardModel(BaseModel):
    """Immutable model config shared by every persisted card region.

    Unknown persisted keys are kept and dumped back unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class Coordinate(CardModel):
    """Signed pixel offset."""

    x: float
    y: float


class FrameSize(CardModel):
    """Width as percent of the column, height in pixels."""

    width: float
    height: float


class FontSettings(CardModel):
    family: FontFamily
    size: float = Field(gt=0)


class HoverShadow(CardModel):
    color: str
    opacity: float = Field(ge=0.0, le=1.0)
    blur: float = Field(ge=0.0)


class HoverEffectConfig(CardModel):
    """Hover enable flag, transition duration and shadow parameters."""

    enabled: bool
    duration: float = Field(ge=0.0)
    shadow: HoverShadow


class HoverEffects(CardModel):
    text: HoverEffectConfig
    image: HoverEffectConfig


class TextColors(CardModel):
    title: str
    body: str
    bullets: str


class StoryImage(CardModel):
    """Image region of a card."""

    url: str
    alt_text: str = Field(alias="altText")
    single_corner: bool = Field(alias="singleCorner")
    corner_reversed: bool = Field(default=False, alias="cornerReversed")
    position: Coordinate
    size: FrameSize


class StoryTextFrame(CardModel):
    """Text region of a card; `size.height` is a minimum height."""

    position: Coordinate
    size: FrameSize
    title_font: FontSettings = Field(alias="titleFont")
    body_font: FontSettings = Field(alias="bodyFont")
    bullet_font: FontSettings = Field(alias="bulletFont")


class StoryCard(CardModel):
    """One render-ready story card in its current schema shape."""

    id: str = Field(min_length=1)
    title: str = ""
    content: str = ""
    title_rich_text: str | None = Field(default=None, alias="titleRichText")
    body_rich_text: str | None = Field(default=None, alias="bodyRichText")
    bullets_rich_text: str | None = Field(default=None, alias="bulletsRichText")
    bullets: tuple[str, ...] = ()
    show_bullets: bool = Field(alias="showBullets")
    accent_color: str = Field(alias="accentColor")
    text_colors: TextColors = Field(alias="textColors")
    image: StoryImage
    text_frame: StoryTextFrame = Field(alias="textFrame")
    hover_effects: HoverEffects = Field(alias="hoverEffects")


_HOVER_DEFAULTS: Final[dict[str, dict[str, Any]]] = {
    "text": {
        "enabled": False,
        "duration": 250,
        "shadow": {"color": "#000000", "opacity": 0.15, "blur": 25},
    },
    "image": {
        "enabled": False,
        "duration": 350,
        "shadow": {"color": "#000000", "opacity": 0.2, "blur": 35},
    },
}


def _hover_default_payload(kind: HoverTarget) -> dict[str, Any]:
    return copy.deepcopy(_HOVER_DEFAULTS[kind])


def default_hover_effect(kind: HoverTarget) -> HoverEffectConfig:
    """Per-target defaults; text and image defaults are not interchangeable."""
    return HoverEffectConfig.model_validate(_hover_default_payload(kind))


@dataclass(frozen=True)
class HoverFlag:
    """Legacy revision: hover stored as a bare boolean."""

    enabled: bool
    kind: Literal["flag"] = "flag"


@dataclass(frozen=True)
class HoverRecord:
    """Current revision: structured (possibly partial) hover config."""

    values: Mapping[str, Any]
    kind: Literal["record"] = "record"


@dataclass(frozen=True)
class HoverMissing:
    kind: Literal["missing"] = "missing"


StoredHover = HoverFlag | HoverRecord | HoverMissing


def decode_stored_hover(value: object) -> StoredHover:
    """Classify a stored hover value before it is normalized."""
    if isinstance(value, bool):
        return HoverFlag(enabled=value)
    if isinstance(value, Mapping):
        return HoverRecord(values=value)
    return HoverMissing()


def _normalize_hover(kind: HoverTarget, stored: StoredHover) -> dict[str, Any]:
    defaults = _hover_default_payload(kind)
    if isinstance(stored, HoverMissing):
        return defaults
    if isinstance(stored, HoverFlag):
        logger.debug("story.normalize upgraded legacy hover flag target=%s", kind)
        defaults["enabled"] = stored.enabled
        return defaults

    values = stored.values
    shadow_values = values.get("shadow")
    shadow = defaults["shadow"]
    if isinstance(shadow_values, Mapping):
        for key in ("color", "opacity", "blur"):
            if shadow_values.get(key) is not None:
                shadow[key] = shadow_values[key]
    duration = values.get("duration")
    return {
        "enabled": bool(values.get("enabled")),
        "duration": defaults["duration"] if duration is None else duration,
        "shadow": shadow,
    }


def _as_mapping(value: object) -> dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def normalize_story_card(raw: Mapping[str, Any] | StoryCard | None) -> dict[str, Any]:
    """Upgrade a persisted card of any schema revision to the current shape.

    Total and idempotent. Only text colors, `image.cornerReversed` and the
    hover effects are backfilled; every other field passes through as stored.
    The input is never mutated.
    """
    if isinstance(raw, StoryCard):
        source: dict[str, Any] = dump_story_card(raw)
    else:
        source = copy.deepcopy(_as_mapping(raw))

    text_colors = _as_mapping(source.get("textColors"))
    for key, fallback in DEFAULT_TEXT_COLORS.items():
        if text_colors.get(key) is None:
            text_colors[key] = fallback
    source["textColors"] = text_colors

    image = _as_mapping(source.get("image"))
    if image.get("cornerReversed") is None:
        image["cornerReversed"] = False
    source["image"] = image

    hover_effects = _as_mapping(source.get("hoverEffects"))
    for kind in HOVER_TARGETS:
        hover_effects[kind] = _normalize_hover(kind, decode_stored_hover(hover_effects.get(kind)))
    source["hoverEffects"] = hover_effects
    return source


def load_story_card(raw: Mapping[str, Any] | StoryCard | None) -> StoryCard:
    """Normalize then validate; raises `ValidationError` on missing mandatory fields."""
    return StoryCard.model_validate(normalize_story_card(raw))


def dump_story_card(card: StoryCard) -> dict[str, Any]:
    """Persisted (camelCase, JSON-safe) shape of one card."""
    return card.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class StorySeed:
    title: str
    content: str
    bullets: tuple[str, ...]
    image_url: str
    image_alt: str


STORY_SEEDS: Final[tuple[StorySeed, ...]] = (
    StorySeed(
        title="Lorem ipsum dolor sit amet",
        content=(
            "Lorem ipsum dolor sit amet, consectetur adipiscing elit. "
            "Vestibulum elementum nisl ut viverra fringilla."
        ),
        bullets=(
            "Curabitur vehicula erat eget urna aliquet",
            "Sed venenatis nibh in elementum laoreet",
            "Morbi vitae orci eget neque lobortis",
            "Duis luctus mi a ultrices faucibus",
        ),
        image_url="https://images.unsplash.com/photo-1505740420928-5e560c06d30e",
        image_alt="Technology detail showing lorem ipsum art",
    ),
    StorySeed(
        title="Consectetur adipiscing elit lorem",
        content=(
            "Integer at lacus tempus, ultricies neque id, interdum nibh. "
            "Aliquam erat volutpat, vivamus at ligula."
        ),
        bullets=(
            "Praesent nec risus ac nulla gravida",
            "Suspendisse potenti vivamus porta",
            "Donec id libero sed justo gravida",
            "Cras convallis ex vitae dui porta",
        ),
        image_url="https://images.unsplash.com/photo-1518770660439-4636190af475",
        image_alt="Abstract industrial lorem ipsum detail",
    ),
)
GENERIC_SEED: Final = StorySeed(
    title="New story title",
    content=(
        "Lorem ipsum dolor sit amet, consectetur adipiscing elit. "
        "Pellentesque a pulvinar sapien, sed blandit nisl."
    ),
    bullets=("Lorem ipsum dolor sit amet", "Consectetur adipiscing elit"),
    image_url="",
    image_alt="Story image",
)


def new_story_id() -> str:
    return str(uuid4())


def create_default_story(seed_index: int = 0) -> StoryCard:
    """Build a fully populated card from a canned seed.

    Odd seeds get the single rounded corner so consecutive defaults alternate.
    """
    seed = STORY_SEEDS[seed_index] if 0 <= seed_index < len(STORY_SEEDS) else GENERIC_SEED
    return StoryCard(
        id=new_story_id(),
        title=seed.title,
        content=seed.content,
        title_rich_text=to_paragraph(seed.title),
        body_rich_text=to_paragraph(seed.content),
        bullets_rich_text=list_to_html(seed.bullets),
        bullets=seed.bullets,
        show_bullets=True,
        accent_color=DEFAULT_ACCENT_COLOR,
        text_colors=TextColors.model_validate(DEFAULT_TEXT_COLORS),
        image=StoryImage(
            url=seed.image_url,
            alt_text=seed.image_alt,
            single_corner=seed_index % 2 == 1,
            corner_reversed=False,
            position=Coordinate(x=0, y=0),
            size=FrameSize(width=100, height=360),
        ),
        text_frame=StoryTextFrame(
            position=Coordinate(x=0, y=0),
            size=FrameSize(width=100, height=240),
            title_font=FontSettings(family="montserrat", size=28),
            body_font=FontSettings(family="sans", size=16),
            bullet_font=FontSettings(family="sans", size=15),
        ),
        hover_effects=HoverEffects(
            text=default_hover_effect("text"),
            image=default_hover_effect("image"),
        ),
    )
