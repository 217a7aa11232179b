from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import pytest

from story_cards.cli import api as api_cli
from story_cards.cli import normalize as normalize_cli
from story_cards.cli import render as render_cli
from story_cards.core.story_collection import create_default_collection, dump_collection


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    for module in (api_cli, normalize_cli, render_cli):
        monkeypatch.setattr(module, "configure_runtime_logging", lambda: None)


def _legacy_file(tmp_path: Path) -> Path:
    stories = dump_collection(create_default_collection())
    for story in stories:
        story["hoverEffects"] = {"text": True, "image": False}
        story.pop("textColors")
    path = tmp_path / "stories.json"
    path.write_text(json.dumps(stories), encoding="utf-8")
    return path


def test_api_main_runs_uvicorn_factory(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    seen: dict[str, Any] = {}
    monkeypatch.setenv("STORY_CARDS_DB_PATH", "unused.db")
    monkeypatch.setattr(
        "story_cards.cli.api.uvicorn.run",
        lambda app, **kwargs: seen.update({"app": app, **kwargs}),
    )
    db_path = tmp_path / "api.db"
    api_cli.main(["--port", "8123", "--db-path", str(db_path)])
    assert seen["app"] == "story_cards.api.app:create_app"
    assert seen["factory"] is True
    assert seen["port"] == 8123
    assert seen["reload"] is False
    assert os.environ["STORY_CARDS_DB_PATH"] == str(db_path)


def test_normalize_main_writes_upgraded_json(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = _legacy_file(tmp_path)
    output = tmp_path / "out" / "normalized.json"
    normalize_cli.main(["--input", str(source), "--output", str(output)])

    captured = capsys.readouterr()
    assert f"Normalized 2 stories: {source}" in captured.out
    assert f"Wrote normalized JSON: {output}" in captured.out
    stories = json.loads(output.read_text(encoding="utf-8"))
    assert stories[0]["hoverEffects"]["text"]["enabled"] is True
    assert stories[0]["textColors"]["body"] == "#667085"


def test_normalize_main_defaults_to_in_place(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = _legacy_file(tmp_path)
    normalize_cli.main(["--input", str(source)])
    assert "Wrote normalized JSON" not in capsys.readouterr().out
    stories = json.loads(source.read_text(encoding="utf-8"))
    assert stories[1]["hoverEffects"]["image"]["duration"] == 350


def test_normalize_main_without_validation_keeps_partial_cards(tmp_path: Path) -> None:
    source = tmp_path / "partial.json"
    source.write_text(json.dumps({"stories": [{"title": "No id yet"}]}), encoding="utf-8")
    normalize_cli.main(["--input", str(source), "--no-validate"])
    (story,) = json.loads(source.read_text(encoding="utf-8"))
    assert story["title"] == "No id yet"
    assert "id" not in story
    assert story["image"] == {"cornerReversed": False}


def test_render_main_prints_bundles(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    render_cli.main(["--input", str(_legacy_file(tmp_path))])
    bundles = json.loads(capsys.readouterr().out)
    assert [bundle["image_left"] for bundle in bundles] == [False, True]
    assert bundles[0]["text_hover"]["shadow"] == "8px 25px rgba(0,0,0,0.15)"
    assert bundles[1]["corner_class"] == "singleLeft"


def test_render_main_writes_output_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    output = tmp_path / "render" / "bundles.json"
    render_cli.main(["--input", str(_legacy_file(tmp_path)), "--output", str(output)])
    assert f"Wrote 2 render bundles: {output}" in capsys.readouterr().out
    assert len(json.loads(output.read_text(encoding="utf-8"))) == 2
