"""Read and write persisted story collections as JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from story_cards.core.story_collection import StoryCollection, dump_collection, load_collection


def read_raw_stories(path: Path) -> list[Any]:
    """Accept either a bare JSON array or an object with a `stories` array."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("stories", [])
    if not isinstance(payload, list):
        raise ValueError(f"{path} must hold a JSON array of story cards.")
    return payload


def load_stories_json(path: Path) -> StoryCollection:
    return load_collection(read_raw_stories(path))


def save_raw_stories(path: Path, stories: list[dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(stories, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def save_stories_json(path: Path, collection: StoryCollection) -> None:
    """Persist a collection in its camelCase storage shape."""
    save_raw_stories(path, dump_collection(collection))
