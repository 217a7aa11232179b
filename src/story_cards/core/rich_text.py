"""Rich markup <-> plain text helpers for story card text fields.

These are regex heuristics over trusted, HTML-like author markup, not a
markup parser. Nested or malformed lists are handled on a best-effort basis
and the splitting rules must stay stable so previously authored content
keeps extracting the same bullets.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Protocol

_TAG = re.compile(r"<[^>]*>")
_NBSP = re.compile(r"&nbsp;", re.IGNORECASE)
_WHITESPACE_RUN = re.compile(r"\s+")
_LIST_ITEM = re.compile(r"<li(?:\s[^>]*)?>(.*?)</li\s*>", re.IGNORECASE | re.DOTALL)
_LIST_ITEM_OPEN = re.compile(r"<li(?:\s[^>]*)?>", re.IGNORECASE)
_LIST_ITEM_CLOSE = re.compile(r"</li\s*>", re.IGNORECASE)
_LIST_CONTAINER = re.compile(r"</?(?:ul|ol)(?:\s[^>]*)?>", re.IGNORECASE)
_BLOCK_BREAK = re.compile(r"<br\s*/?>|</(?:p|div|h[1-6])\s*>", re.IGNORECASE)
_FALLBACK_SPLIT = re.compile(r"\n|\.(?:\s+|$)")


class BulletSource(Protocol):
    """Card fields read when rendering the bullet region."""

    @property
    def show_bullets(self) -> bool: ...

    @property
    def bullets(self) -> Sequence[str]: ...

    @property
    def bullets_rich_text(self) -> str | None: ...


def to_paragraph(value: str) -> str:
    return f"<p>{value}</p>"


def list_to_html(items: Iterable[str]) -> str:
    """Wrap items in one unordered list; no items renders nothing."""
    entries = "".join(f"<li>{item}</li>" for item in items)
    return f"<ul>{entries}</ul>" if entries else ""


def _decode_nbsp(value: str) -> str:
    return _NBSP.sub(" ", value)


def strip_markup(value: str | None) -> str:
    """Drop tags, decode `&nbsp;`, collapse whitespace and trim."""
    if not value:
        return ""
    text = _decode_nbsp(_TAG.sub("", value))
    return _WHITESPACE_RUN.sub(" ", text).strip()


def ensure_rich_text(rich_value: str | None, plain_fallback: str | None = None) -> str:
    if rich_value and rich_value.strip():
        return rich_value
    if not plain_fallback:
        return ""
    return to_paragraph(plain_fallback)


def extract_list_items(markup: str | None) -> list[str]:
    """Derive plain bullet strings from free-form markup.

    List items win when present. Otherwise the tag-free text is split on
    newlines and on a period followed by whitespace (or the end of text);
    prose that is not a list gets split too.
    """
    if not markup:
        return []
    matches = _LIST_ITEM.findall(markup)
    if matches:
        items = (_decode_nbsp(_TAG.sub("", match)).strip() for match in matches)
        return [item for item in items if item]

    text = _decode_nbsp(_TAG.sub("", _BLOCK_BREAK.sub("\n", markup)))
    pieces = (piece.strip() for piece in _FALLBACK_SPLIT.split(text))
    return [piece for piece in pieces if piece]


def list_markup_to_paragraphs(markup: str) -> str:
    """Unwrap list markup into paragraphs, keeping inline formatting."""
    unwrapped = _LIST_CONTAINER.sub("", markup)
    unwrapped = _LIST_ITEM_OPEN.sub("<p>", unwrapped)
    return _LIST_ITEM_CLOSE.sub("</p>", unwrapped)


def bullet_markup(card: BulletSource) -> str:
    """Markup for the bullet region, honoring `show_bullets`."""
    rich = card.bullets_rich_text
    if card.show_bullets:
        return ensure_rich_text(rich, list_to_html(card.bullets))
    if rich and rich.strip():
        return list_markup_to_paragraphs(rich)
    return "".join(to_paragraph(item) for item in card.bullets)
