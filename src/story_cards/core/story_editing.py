"""Copy-on-write field updates used by the editing surface.

Every helper takes a card and returns a new card; nested regions are
rebuilt with `model_copy` so no caller ever aliases a mutable sub-record.
Numeric inputs are clamped into the editor ranges below.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal

from story_cards.core.color_math import is_valid_hex6, normalize_hex
from story_cards.core.rich_text import extract_list_items, strip_markup
from story_cards.core.story_schema import (
    FontFamily,
    HoverEffectConfig,
    HoverTarget,
    StoryCard,
    TextColorKey,
)

FontSlot = Literal["title", "body", "bullets"]


@dataclass(frozen=True)
class EditorRange:
    """Inclusive bounds (and slider step) for one numeric control."""

    minimum: float
    maximum: float
    step: float = 1

    def clamp(self, value: float) -> float:
        """Snap to the nearest step counted from `minimum`, then bound."""
        snapped = self.minimum + round((value - self.minimum) / self.step) * self.step
        return max(self.minimum, min(self.maximum, snapped))


POSITION_RANGE: Final = EditorRange(-120, 120)
IMAGE_WIDTH_RANGE: Final = EditorRange(40, 120)
IMAGE_HEIGHT_RANGE: Final = EditorRange(200, 640)
TEXT_WIDTH_RANGE: Final = EditorRange(50, 120)
TEXT_MIN_HEIGHT_RANGE: Final = EditorRange(160, 600)
FONT_SIZE_RANGES: Final[dict[str, EditorRange]] = {
    "title": EditorRange(18, 48),
    "body": EditorRange(12, 32),
    "bullets": EditorRange(11, 30),
}
HOVER_DURATION_RANGE: Final = EditorRange(100, 2000, step=50)
HOVER_BLUR_RANGE: Final = EditorRange(0, 120)
HOVER_OPACITY_PERCENT_RANGE: Final = EditorRange(0, 100)

_FONT_FIELDS: Final[dict[str, str]] = {
    "title": "title_font",
    "body": "body_font",
    "bullets": "bullet_font",
}


def with_image(
    card: StoryCard,
    *,
    url: str | None = None,
    alt_text: str | None = None,
    single_corner: bool | None = None,
    corner_reversed: bool | None = None,
) -> StoryCard:
    changes: dict[str, object] = {}
    if url is not None:
        changes["url"] = url
    if alt_text is not None:
        changes["alt_text"] = alt_text
    if single_corner is not None:
        changes["single_corner"] = single_corner
    if corner_reversed is not None:
        changes["corner_reversed"] = corner_reversed
    return card.model_copy(update={"image": card.image.model_copy(update=changes)})


def with_image_position(
    card: StoryCard, *, x: float | None = None, y: float | None = None
) -> StoryCard:
    position = card.image.position
    moved = position.model_copy(
        update={
            "x": position.x if x is None else POSITION_RANGE.clamp(x),
            "y": position.y if y is None else POSITION_RANGE.clamp(y),
        }
    )
    return card.model_copy(update={"image": card.image.model_copy(update={"position": moved})})


def with_image_size(
    card: StoryCard, *, width: float | None = None, height: float | None = None
) -> StoryCard:
    size = card.image.size
    resized = size.model_copy(
        update={
            "width": size.width if width is None else IMAGE_WIDTH_RANGE.clamp(width),
            "height": size.height if height is None else IMAGE_HEIGHT_RANGE.clamp(height),
        }
    )
    return card.model_copy(update={"image": card.image.model_copy(update={"size": resized})})


def with_text_frame(
    card: StoryCard,
    *,
    x: float | None = None,
    y: float | None = None,
    width: float | None = None,
    min_height: float | None = None,
) -> StoryCard:
    frame = card.text_frame
    position = frame.position.model_copy(
        update={
            "x": frame.position.x if x is None else POSITION_RANGE.clamp(x),
            "y": frame.position.y if y is None else POSITION_RANGE.clamp(y),
        }
    )
    size = frame.size.model_copy(
        update={
            "width": frame.size.width if width is None else TEXT_WIDTH_RANGE.clamp(width),
            "height": frame.size.height
            if min_height is None
            else TEXT_MIN_HEIGHT_RANGE.clamp(min_height),
        }
    )
    return card.model_copy(
        update={"text_frame": frame.model_copy(update={"position": position, "size": size})}
    )


def with_font(
    card: StoryCard,
    slot: FontSlot,
    *,
    family: FontFamily | None = None,
    size: float | None = None,
) -> StoryCard:
    field_name = _FONT_FIELDS[slot]
    current = getattr(card.text_frame, field_name)
    font = current.model_copy(
        update={
            "family": current.family if family is None else family,
            "size": current.size if size is None else FONT_SIZE_RANGES[slot].clamp(size),
        }
    )
    return card.model_copy(
        update={"text_frame": card.text_frame.model_copy(update={field_name: font})}
    )


def with_hover_effect(
    card: StoryCard,
    target: HoverTarget,
    *,
    enabled: bool | None = None,
    duration: float | None = None,
    shadow_color: str | None = None,
    shadow_opacity_percent: float | None = None,
    shadow_blur: float | None = None,
) -> StoryCard:
    """Update one hover config; opacity is edited as a 0-100 percentage."""
    current: HoverEffectConfig = getattr(card.hover_effects, target)
    shadow = current.shadow
    shadow_changes: dict[str, object] = {}
    if shadow_color is not None:
        color = normalize_hex(shadow_color)
        if is_valid_hex6(color):
            shadow_changes["color"] = color
    if shadow_opacity_percent is not None:
        shadow_changes["opacity"] = HOVER_OPACITY_PERCENT_RANGE.clamp(shadow_opacity_percent) / 100
    if shadow_blur is not None:
        shadow_changes["blur"] = HOVER_BLUR_RANGE.clamp(shadow_blur)

    changes: dict[str, object] = {"shadow": shadow.model_copy(update=shadow_changes)}
    if enabled is not None:
        changes["enabled"] = enabled
    if duration is not None:
        changes["duration"] = HOVER_DURATION_RANGE.clamp(duration)
    updated = current.model_copy(update=changes)
    return card.model_copy(
        update={"hover_effects": card.hover_effects.model_copy(update={target: updated})}
    )


def with_text_color(card: StoryCard, key: TextColorKey, value: str) -> StoryCard:
    """Apply a typed hex color; input that is not 6-digit hex leaves the card as is."""
    color = normalize_hex(value)
    if not is_valid_hex6(color):
        return card
    return card.model_copy(
        update={"text_colors": card.text_colors.model_copy(update={key: color})}
    )


def with_accent_color(card: StoryCard, value: str) -> StoryCard:
    color = normalize_hex(value)
    if not is_valid_hex6(color):
        return card
    return card.model_copy(update={"accent_color": color})


def with_show_bullets(card: StoryCard, show_bullets: bool) -> StoryCard:
    return card.model_copy(update={"show_bullets": show_bullets})


def apply_plain_title(card: StoryCard, text: str | None) -> StoryCard:
    return card.model_copy(update={"title": text or ""})


def apply_plain_content(card: StoryCard, text: str | None) -> StoryCard:
    return card.model_copy(update={"content": text or ""})


def apply_plain_bullets(card: StoryCard, text: str | None) -> StoryCard:
    """Set bullets from one-per-line text; `bullets_rich_text` is left as is."""
    bullets = tuple(line.strip() for line in (text or "").split("\n") if line.strip())
    return card.model_copy(update={"bullets": bullets})


def apply_title_rich_text(card: StoryCard, markup: str) -> StoryCard:
    return card.model_copy(update={"title_rich_text": markup, "title": strip_markup(markup)})


def apply_body_rich_text(card: StoryCard, markup: str) -> StoryCard:
    return card.model_copy(update={"body_rich_text": markup, "content": strip_markup(markup)})


def apply_bullets_rich_text(card: StoryCard, markup: str) -> StoryCard:
    return card.model_copy(
        update={
            "bullets_rich_text": markup,
            "bullets": tuple(extract_list_items(markup)),
        }
    )
