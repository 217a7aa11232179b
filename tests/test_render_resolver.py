from __future__ import annotations

from story_cards.core.render_resolver import (
    resolve_body_markup,
    resolve_bullet_markup,
    resolve_collection_render,
    resolve_hover_visual,
    resolve_image_corner_class,
    resolve_image_frame_style,
    resolve_row_side_is_image_left,
    resolve_story_render,
    resolve_text_frame_style,
    resolve_title_markup,
    resolve_typography,
)
from story_cards.core.story_editing import (
    with_hover_effect,
    with_image,
    with_image_position,
    with_text_color,
    with_text_frame,
)
from story_cards.core.story_schema import (
    HoverEffectConfig,
    StoryCard,
    create_default_story,
    default_hover_effect,
)


def _card() -> StoryCard:
    return create_default_story(0)


def test_text_frame_style_uses_size_and_position_verbatim() -> None:
    card = with_text_frame(_card(), x=-20, y=15, width=80, min_height=300)
    style = resolve_text_frame_style(card)
    assert style.max_width_pct == 80
    assert style.min_height_px == 300
    assert (style.translate_x, style.translate_y) == (-20, 15)
    assert style.transform == "translate(-20px, 15px)"


def test_image_frame_style_uses_image_size_and_position() -> None:
    card = with_image_position(_card(), x=12, y=-7)
    style = resolve_image_frame_style(card)
    assert style.width_pct == 100
    assert style.height_px == 360
    assert style.transform == "translate(12px, -7px)"


def test_corner_class_covers_all_combinations() -> None:
    card = _card()
    plain = with_image(card, single_corner=False, corner_reversed=True)
    assert resolve_image_corner_class(plain) == "none"
    assert resolve_image_corner_class(with_image(card, single_corner=True)) == "singleLeft"
    assert (
        resolve_image_corner_class(with_image(card, single_corner=True, corner_reversed=True))
        == "singleRight"
    )


def test_disabled_hover_resolves_to_none() -> None:
    assert resolve_hover_visual(default_hover_effect("text")) is None


def test_enabled_hover_resolves_duration_and_shadow() -> None:
    config = HoverEffectConfig.model_validate(
        {"enabled": True, "duration": 300, "shadow": {"color": "#abc", "opacity": 0.4, "blur": 30}}
    )
    visual = resolve_hover_visual(config)
    assert visual is not None
    assert visual.duration_ms == 300
    assert visual.shadow == "10px 30px rgba(170,187,204,0.4)"


def test_row_side_alternates_by_parity() -> None:
    for index in range(51):
        assert resolve_row_side_is_image_left(index) is (index % 2 == 1)


def test_title_and_body_markup_fall_back_to_plain_text() -> None:
    card = _card().model_copy(update={"title_rich_text": None, "body_rich_text": " "})
    assert resolve_title_markup(card) == f"<p>{card.title}</p>"
    assert resolve_body_markup(card) == f"<p>{card.content}</p>"


def test_bullet_markup_toggle_keeps_inner_formatting() -> None:
    card = _card().model_copy(
        update={
            "show_bullets": False,
            "bullets_rich_text": "<ul><li><em>One</em></li><li>Two</li></ul>",
        }
    )
    markup = resolve_bullet_markup(card)
    assert "<li" not in markup and "<ul" not in markup
    assert markup == "<p><em>One</em></p><p>Two</p>"


def test_typography_resolves_family_weight_and_color() -> None:
    card = with_text_color(_card(), "body", "#123")
    typography = resolve_typography(card)
    assert typography.title.family_css == '"Montserrat", "Segoe UI", sans-serif'
    assert typography.title.font_weight == 700
    assert typography.title.size_px == 28
    assert typography.title.color == "#041c3d"
    assert typography.body.font_weight == 400
    assert typography.body.color == "#112233"
    assert typography.bullets.size_px == 15


def test_story_render_bundle_combines_resolvers() -> None:
    card = with_hover_effect(_card(), "image", enabled=True)
    bundle = resolve_story_render(card, 3)
    assert bundle.story_id == card.id
    assert bundle.image_left is True
    assert bundle.corner_class == "none"
    assert bundle.text_hover is None
    assert bundle.image_hover is not None
    assert bundle.image_hover.duration_ms == 350
    assert bundle.image_hover.shadow == "12px 35px rgba(0,0,0,0.2)"
    assert bundle.bullet_markup.startswith("<ul><li>")
    assert bundle.accent_color == "#f26c2b"
    assert bundle.image_alt == card.image.alt_text


def test_collection_render_indexes_rows() -> None:
    bundles = resolve_collection_render((create_default_story(0), create_default_story(1)))
    assert [bundle.index for bundle in bundles] == [0, 1]
    assert [bundle.image_left for bundle in bundles] == [False, True]
    assert [bundle.corner_class for bundle in bundles] == ["none", "singleLeft"]
