from __future__ import annotations

import pytest

from story_cards.core.color_math import (
    build_shadow_string,
    format_css_number,
    hex_to_rgba,
    is_valid_hex6,
    normalize_hex,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("#abc", "#aabbcc"),
        ("abc", "#aabbcc"),
        ("#aabbcc", "#aabbcc"),
        ("aabbcc", "#aabbcc"),
        ("", "#000000"),
        (None, "#000000"),
    ],
)
def test_normalize_hex_expands_and_prefixes(raw: str | None, expected: str) -> None:
    assert normalize_hex(raw) == expected


def test_normalize_hex_leaves_other_malformed_input_prefixed_only() -> None:
    assert normalize_hex("zz") == "#zz"
    assert normalize_hex("#12345") == "#12345"


def test_is_valid_hex6_gate() -> None:
    assert is_valid_hex6("#AABBCC") is True
    assert is_valid_hex6("#a1b2c3") is True
    assert is_valid_hex6("abc") is False
    assert is_valid_hex6("#abc") is False
    assert is_valid_hex6("aabbcc") is False
    assert is_valid_hex6("#aabbccdd") is False
    assert is_valid_hex6("") is False


def test_hex_to_rgba_parses_short_and_long_forms() -> None:
    assert hex_to_rgba("#000000", 0.15) == "rgba(0,0,0,0.15)"
    assert hex_to_rgba("#f26c2b", 1) == "rgba(242,108,43,1)"
    assert hex_to_rgba("fff", 0.5) == "rgba(255,255,255,0.5)"


def test_hex_to_rgba_passes_opacity_through_unclamped() -> None:
    assert hex_to_rgba("#010203", 1.5) == "rgba(1,2,3,1.5)"
    assert hex_to_rgba("#010203", -0.25) == "rgba(1,2,3,-0.25)"


def test_hex_to_rgba_unparseable_color_reads_as_black() -> None:
    assert hex_to_rgba("not-a-color", 0.2) == "rgba(0,0,0,0.2)"


def test_shadow_string_applies_offset_and_blur_floors() -> None:
    assert build_shadow_string(0, "#000000", 0.15) == "8px 5px rgba(0,0,0,0.15)"


def test_shadow_string_scales_offset_with_blur() -> None:
    assert build_shadow_string(35, "#000000", 0.2) == "12px 35px rgba(0,0,0,0.2)"
    assert build_shadow_string(120, "#ffffff", 0.5) == "40px 120px rgba(255,255,255,0.5)"


def test_shadow_offset_rounds_half_up() -> None:
    # 37.5 / 3 == 12.5
    assert build_shadow_string(37.5, "#000", 1).startswith("13px 37.5px")


def test_format_css_number_drops_integral_fraction() -> None:
    assert format_css_number(8.0) == "8"
    assert format_css_number(0.15) == "0.15"
    assert format_css_number(-12) == "-12"
