from __future__ import annotations

from pathlib import Path

from story_cards.adapters.sqlite_story_section_store import (
    SQLiteStorySectionStore,
    StoredSection,
)


def test_store_round_trip(tmp_path: Path) -> None:
    store = SQLiteStorySectionStore(db_path=tmp_path / "nested" / "sections.db")
    assert store.get_section(section_id="home") is None

    saved = store.save_section(section_id="home", stories=[{"id": "a", "title": "Ünïcode"}])
    loaded = store.get_section(section_id="home")
    assert loaded == saved
    assert loaded is not None
    assert loaded.raw_stories() == [{"id": "a", "title": "Ünïcode"}]


def test_save_overwrites_stories_and_keeps_created_at(tmp_path: Path) -> None:
    store = SQLiteStorySectionStore(db_path=tmp_path / "sections.db")
    first = store.save_section(section_id="home", stories=[{"id": "a"}])
    second = store.save_section(section_id="home", stories=[{"id": "b"}, {"id": "c"}])
    assert second.created_at_utc == first.created_at_utc
    assert second.updated_at_utc >= first.updated_at_utc
    assert [item["id"] for item in second.raw_stories()] == ["b", "c"]


def test_list_section_ids(tmp_path: Path) -> None:
    store = SQLiteStorySectionStore(db_path=tmp_path / "sections.db")
    store.save_section(section_id="home", stories=[])
    store.save_section(section_id="about", stories=[])
    assert sorted(store.list_section_ids()) == ["about", "home"]
    assert len(store.list_section_ids(limit=1)) == 1


def test_store_survives_reopen(tmp_path: Path) -> None:
    db_path = tmp_path / "sections.db"
    SQLiteStorySectionStore(db_path=db_path).save_section(section_id="home", stories=[{"id": "a"}])
    reopened = SQLiteStorySectionStore(db_path=db_path)
    section = reopened.get_section(section_id="home")
    assert section is not None
    assert section.raw_stories() == [{"id": "a"}]


def test_raw_stories_ignores_non_object_payloads() -> None:
    section = StoredSection("home", '[{"id": "a"}, 3, "x"]', "t", "t")
    assert section.raw_stories() == [{"id": "a"}]
    assert StoredSection("home", '{"id": "a"}', "t", "t").raw_stories() == []
