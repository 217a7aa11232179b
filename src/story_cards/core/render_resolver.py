"""Derive primitive render parameters from normalized story cards."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final, Literal

from story_cards.core.color_math import build_shadow_string, format_css_number, normalize_hex
from story_cards.core.rich_text import bullet_markup, ensure_rich_text
from story_cards.core.story_schema import FontSettings, HoverEffectConfig, StoryCard

ImageCornerClass = Literal["none", "singleLeft", "singleRight"]

FONT_STACKS: Final[dict[str, tuple[str, int]]] = {
    "montserrat": ('"Montserrat", "Segoe UI", sans-serif', 700),
    "sans": ('"Segoe UI", "Helvetica Neue", Arial, sans-serif', 400),
}


def _translate(x: float, y: float) -> str:
    return f"translate({format_css_number(x)}px, {format_css_number(y)}px)"


@dataclass(frozen=True)
class TextFrameStyle:
    max_width_pct: float
    min_height_px: float
    translate_x: float
    translate_y: float
    transform: str


@dataclass(frozen=True)
class ImageFrameStyle:
    width_pct: float
    height_px: float
    translate_x: float
    translate_y: float
    transform: str


@dataclass(frozen=True)
class HoverVisual:
    duration_ms: float
    shadow: str


@dataclass(frozen=True)
class ResolvedFont:
    family_css: str
    font_weight: int
    size_px: float
    color: str


@dataclass(frozen=True)
class ResolvedTypography:
    title: ResolvedFont
    body: ResolvedFont
    bullets: ResolvedFont


@dataclass(frozen=True)
class StoryRenderBundle:
    """Everything the view layer needs to paint one story row."""

    story_id: str
    index: int
    image_left: bool
    text_frame: TextFrameStyle
    image_frame: ImageFrameStyle
    corner_class: ImageCornerClass
    text_hover: HoverVisual | None
    image_hover: HoverVisual | None
    typography: ResolvedTypography
    title_markup: str
    body_markup: str
    bullet_markup: str
    accent_color: str
    image_url: str
    image_alt: str


def resolve_text_frame_style(card: StoryCard) -> TextFrameStyle:
    frame = card.text_frame
    return TextFrameStyle(
        max_width_pct=frame.size.width,
        min_height_px=frame.size.height,
        translate_x=frame.position.x,
        translate_y=frame.position.y,
        transform=_translate(frame.position.x, frame.position.y),
    )


def resolve_image_frame_style(card: StoryCard) -> ImageFrameStyle:
    image = card.image
    return ImageFrameStyle(
        width_pct=image.size.width,
        height_px=image.size.height,
        translate_x=image.position.x,
        translate_y=image.position.y,
        transform=_translate(image.position.x, image.position.y),
    )


def resolve_image_corner_class(card: StoryCard) -> ImageCornerClass:
    if not card.image.single_corner:
        return "none"
    return "singleRight" if card.image.corner_reversed else "singleLeft"


def resolve_hover_visual(config: HoverEffectConfig) -> HoverVisual | None:
    if not config.enabled:
        return None
    shadow = config.shadow
    return HoverVisual(
        duration_ms=config.duration,
        shadow=build_shadow_string(shadow.blur, shadow.color, shadow.opacity),
    )


def resolve_row_side_is_image_left(index: int) -> bool:
    # Odd rows put the image on the left.
    return index % 2 == 1


def resolve_font(settings: FontSettings, color: str) -> ResolvedFont:
    family_css, weight = FONT_STACKS[settings.family]
    return ResolvedFont(
        family_css=family_css,
        font_weight=weight,
        size_px=settings.size,
        color=normalize_hex(color),
    )


def resolve_typography(card: StoryCard) -> ResolvedTypography:
    frame = card.text_frame
    colors = card.text_colors
    return ResolvedTypography(
        title=resolve_font(frame.title_font, colors.title),
        body=resolve_font(frame.body_font, colors.body),
        bullets=resolve_font(frame.bullet_font, colors.bullets),
    )


def resolve_title_markup(card: StoryCard) -> str:
    return ensure_rich_text(card.title_rich_text, card.title)


def resolve_body_markup(card: StoryCard) -> str:
    return ensure_rich_text(card.body_rich_text, card.content)


def resolve_bullet_markup(card: StoryCard) -> str:
    return bullet_markup(card)


def resolve_story_render(card: StoryCard, index: int) -> StoryRenderBundle:
    return StoryRenderBundle(
        story_id=card.id,
        index=index,
        image_left=resolve_row_side_is_image_left(index),
        text_frame=resolve_text_frame_style(card),
        image_frame=resolve_image_frame_style(card),
        corner_class=resolve_image_corner_class(card),
        text_hover=resolve_hover_visual(card.hover_effects.text),
        image_hover=resolve_hover_visual(card.hover_effects.image),
        typography=resolve_typography(card),
        title_markup=resolve_title_markup(card),
        body_markup=resolve_body_markup(card),
        bullet_markup=resolve_bullet_markup(card),
        accent_color=normalize_hex(card.accent_color),
        image_url=card.image.url,
        image_alt=card.image.alt_text,
    )


def resolve_collection_render(collection: Iterable[StoryCard]) -> list[StoryRenderBundle]:
    return [resolve_story_render(card, index) for index, card in enumerate(collection)]
