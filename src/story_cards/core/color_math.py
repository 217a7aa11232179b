"""Hex color parsing and rgba/shadow string synthesis."""

from __future__ import annotations

import math
import re

FALLBACK_HEX = "#000000"
_HEX6_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")
_HEX_DIGITS = re.compile(r"^[0-9a-fA-F]{6}$")

MIN_SHADOW_OFFSET_PX = 8
MIN_SHADOW_BLUR_PX = 5


def _expand_shorthand(digits: str) -> str:
    return "".join(f"{char}{char}" for char in digits)


def format_css_number(value: float) -> str:
    """Render a number the way a browser prints it (no trailing `.0`)."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def normalize_hex(value: str | None) -> str:
    """Return `#`-prefixed hex, expanding 3-digit shorthand.

    Only the empty case falls back to black; other malformed strings are
    returned prefixed but otherwise untouched. Use `is_valid_hex6` to gate
    interactive input.
    """
    if not value:
        return FALLBACK_HEX
    normalized = value if value.startswith("#") else f"#{value}"
    if len(normalized) == 4:
        normalized = "#" + _expand_shorthand(normalized[1:])
    return normalized


def is_valid_hex6(value: str | None) -> bool:
    return bool(value) and _HEX6_PATTERN.match(str(value)) is not None


def hex_to_rgba(hex_value: str | None, opacity: float) -> str:
    """Build `rgba(r,g,b,opacity)`; opacity is passed through unclamped."""
    digits = (hex_value or "").lstrip("#")
    if len(digits) == 3:
        digits = _expand_shorthand(digits)
    parsed = int(digits, 16) if _HEX_DIGITS.match(digits) else 0
    red = (parsed >> 16) & 255
    green = (parsed >> 8) & 255
    blue = parsed & 255
    return f"rgba({red},{green},{blue},{format_css_number(opacity)})"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def build_shadow_string(blur: float, color: str | None, opacity: float) -> str:
    """Return `<offset>px <blur>px <rgba>` with floors on offset and blur."""
    offset = max(_round_half_up(blur / 3), MIN_SHADOW_OFFSET_PX)
    rendered_blur = max(blur, MIN_SHADOW_BLUR_PX)
    return (
        f"{format_css_number(offset)}px {format_css_number(rendered_blur)}px "
        f"{hex_to_rgba(color, opacity)}"
    )
