"""Ordered story card collections with copy-on-write operations."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Literal

from story_cards.core.story_schema import (
    StoryCard,
    create_default_story,
    dump_story_card,
    load_story_card,
    new_story_id,
)

logger = logging.getLogger(__name__)

StoryCollection = tuple[StoryCard, ...]
MoveDirection = Literal[-1, 1]


def create_default_collection() -> StoryCollection:
    return (create_default_story(0), create_default_story(1))


def add_story(collection: StoryCollection) -> tuple[StoryCollection, StoryCard]:
    """Append a seeded card, keeping the corner alternation by position."""
    card = create_default_story(len(collection) % 2)
    return (*collection, card), card


def remove_story(collection: StoryCollection, story_id: str) -> StoryCollection:
    """Drop the matching card. The one-card minimum is an editor policy, not enforced here."""
    return tuple(card for card in collection if card.id != story_id)


def move_story(
    collection: StoryCollection, index: int, direction: MoveDirection
) -> StoryCollection:
    target = index + direction
    if not 0 <= index < len(collection) or not 0 <= target < len(collection):
        return collection
    reordered = list(collection)
    reordered[index], reordered[target] = reordered[target], reordered[index]
    return tuple(reordered)


def update_story_by_id(
    collection: StoryCollection,
    story_id: str,
    updater: Callable[[StoryCard], StoryCard],
) -> StoryCollection:
    """Replace the matching card with `updater(card)`; other cards keep identity."""
    if find_story(collection, story_id) is None:
        return collection
    return tuple(updater(card) if card.id == story_id else card for card in collection)


def find_story(collection: Iterable[StoryCard], story_id: str) -> StoryCard | None:
    for card in collection:
        if card.id == story_id:
            return card
    return None


def index_of_story(collection: StoryCollection, story_id: str) -> int | None:
    for index, card in enumerate(collection):
        if card.id == story_id:
            return index
    return None


def load_collection(
    raw_items: Iterable[Mapping[str, Any] | StoryCard] | None,
    *,
    seed_when_empty: bool = True,
) -> StoryCollection:
    """Normalize persisted cards; an empty input yields the seeded defaults.

    Pass `seed_when_empty=False` for collections that were emptied on purpose.
    Duplicate ids are re-keyed so ids stay unique within the collection.
    """
    cards: list[StoryCard] = []
    seen: set[str] = set()
    for raw in raw_items or ():
        card = load_story_card(raw)
        if card.id in seen:
            fresh_id = new_story_id()
            logger.warning("story.collection duplicate_id=%s rekeyed=%s", card.id, fresh_id)
            card = card.model_copy(update={"id": fresh_id})
        seen.add(card.id)
        cards.append(card)
    if not cards and seed_when_empty:
        logger.info("story.collection empty input, seeding defaults")
        return create_default_collection()
    return tuple(cards)


def dump_collection(collection: Iterable[StoryCard]) -> list[dict[str, Any]]:
    return [dump_story_card(card) for card in collection]
