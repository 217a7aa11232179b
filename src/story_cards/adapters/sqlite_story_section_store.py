"""SQLite-backed persistence for page sections and their story collections."""

from __future__ import annotations

import json
import sqlite3
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class StoredSection:
    """One page section holding a persisted story collection."""

    section_id: str
    stories_json: str
    created_at_utc: str
    updated_at_utc: str

    def raw_stories(self) -> list[dict[str, Any]]:
        """Decode stored cards; anything other than a list of objects reads as empty."""
        payload = json.loads(self.stories_json)
        if not isinstance(payload, list):
            return []
        return [item for item in payload if isinstance(item, dict)]


class SQLiteStorySectionStore:
    """Persist story collections keyed by section id in one SQLite database."""

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize_schema()

    def _connect(self) -> sqlite3.Connection:
        connection = sqlite3.connect(str(self._db_path))
        connection.row_factory = sqlite3.Row
        return connection

    def _initialize_schema(self) -> None:
        with self._connect() as connection:
            connection.execute(
                """
                CREATE TABLE IF NOT EXISTS story_sections (
                    section_id TEXT PRIMARY KEY,
                    stories_json TEXT NOT NULL,
                    created_at_utc TEXT NOT NULL,
                    updated_at_utc TEXT NOT NULL
                )
                """
            )

    def get_section(self, *, section_id: str) -> StoredSection | None:
        """Load one section by id."""
        with self._connect() as connection:
            row = connection.execute(
                """
                SELECT section_id, stories_json, created_at_utc, updated_at_utc
                FROM story_sections
                WHERE section_id = ?
                """,
                (section_id,),
            ).fetchone()
        if row is None:
            return None
        return self._section_from_row(row)

    def save_section(self, *, section_id: str, stories: list[dict[str, Any]]) -> StoredSection:
        """Insert or replace the stories of one section."""
        now = datetime.now(UTC).isoformat()
        stories_json = json.dumps(stories, ensure_ascii=False)
        with self._connect() as connection:
            connection.execute(
                """
                INSERT INTO story_sections (
                    section_id, stories_json, created_at_utc, updated_at_utc
                )
                VALUES (?, ?, ?, ?)
                ON CONFLICT(section_id) DO UPDATE SET
                    stories_json = excluded.stories_json,
                    updated_at_utc = excluded.updated_at_utc
                """,
                (section_id, stories_json, now, now),
            )
        section = self.get_section(section_id=section_id)
        if section is None:
            raise RuntimeError("Saved section could not be loaded.")
        return section

    def list_section_ids(self, *, limit: int = 100) -> list[str]:
        """Return recently updated section ids."""
        with self._connect() as connection:
            rows = connection.execute(
                """
                SELECT section_id
                FROM story_sections
                ORDER BY updated_at_utc DESC
                LIMIT ?
                """,
                (limit,),
            ).fetchall()
        return [str(row["section_id"]) for row in rows]

    @staticmethod
    def _section_from_row(row: sqlite3.Row) -> StoredSection:
        return StoredSection(
            section_id=str(row["section_id"]),
            stories_json=str(row["stories_json"]),
            created_at_utc=str(row["created_at_utc"]),
            updated_at_utc=str(row["updated_at_utc"]),
        )
