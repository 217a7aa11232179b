from __future__ import annotations

import logging

import pytest

from story_cards.core.story_collection import (
    add_story,
    create_default_collection,
    dump_collection,
    find_story,
    index_of_story,
    load_collection,
    move_story,
    remove_story,
    update_story_by_id,
)
from story_cards.core.story_schema import StoryCard, create_default_story


def _three() -> tuple[StoryCard, StoryCard, StoryCard]:
    return (create_default_story(0), create_default_story(1), create_default_story(0))


def test_default_collection_has_two_alternating_cards() -> None:
    first, second = create_default_collection()
    assert first.image.single_corner is False
    assert second.image.single_corner is True
    assert first.id != second.id


@pytest.mark.parametrize("length", [0, 1, 2, 3])
def test_add_story_appends_one_card_with_parity_corner(length: int) -> None:
    collection = tuple(create_default_story(index % 2) for index in range(length))
    updated, card = add_story(collection)
    assert len(updated) == length + 1
    assert updated[-1] is card
    assert card.image.single_corner is (length % 2 == 1)
    assert updated[:length] == collection


def test_remove_story_by_id() -> None:
    a, b, c = _three()
    assert remove_story((a, b, c), b.id) == (a, c)
    assert remove_story((a,), a.id) == ()


def test_remove_unknown_id_is_noop() -> None:
    collection = _three()
    assert remove_story(collection, "missing") == collection


def test_move_story_swaps_neighbours() -> None:
    a, b, c = _three()
    assert move_story((a, b, c), 1, -1) == (b, a, c)
    assert move_story((a, b, c), 1, 1) == (a, c, b)


def test_move_story_out_of_bounds_is_noop() -> None:
    collection = _three()
    assert move_story(collection, 0, -1) is collection
    assert move_story(collection, 2, 1) is collection
    assert move_story(collection, 7, -1) is collection


def test_update_story_by_id_replaces_only_matching_card() -> None:
    a, b, c = _three()
    collection = (a, b, c)
    updated = update_story_by_id(
        collection, b.id, lambda card: card.model_copy(update={"title": "New"})
    )
    assert updated[0] is a
    assert updated[2] is c
    assert updated[1] is not b
    assert updated[1].title == "New"
    assert b.title != "New"


def test_update_story_by_id_unknown_id_returns_same_collection() -> None:
    collection = _three()
    assert update_story_by_id(collection, "missing", lambda card: card) is collection


def test_find_and_index_helpers() -> None:
    a, b, c = _three()
    assert find_story((a, b, c), c.id) is c
    assert find_story((a, b, c), "missing") is None
    assert index_of_story((a, b, c), b.id) == 1
    assert index_of_story((a, b, c), "missing") is None


def test_load_collection_seeds_defaults_for_empty_input() -> None:
    assert len(load_collection([])) == 2
    assert len(load_collection(None)) == 2


def test_load_collection_round_trips_persisted_cards() -> None:
    collection = create_default_collection()
    raw = dump_collection(collection)
    assert dump_collection(load_collection(raw)) == raw


def test_load_collection_rekeys_duplicate_ids(caplog: pytest.LogCaptureFixture) -> None:
    card = create_default_story(0)
    raw = dump_collection((card, card))
    with caplog.at_level(logging.WARNING, logger="story_cards.core.story_collection"):
        loaded = load_collection(raw)
    assert loaded[0].id == card.id
    assert loaded[1].id != card.id
    assert "duplicate_id" in caplog.text


def test_load_collection_can_keep_an_emptied_collection() -> None:
    assert load_collection([], seed_when_empty=False) == ()
    assert len(load_collection([dump_collection(create_default_collection())[0]])) == 1
