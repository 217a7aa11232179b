"""CLI for upgrading persisted story card JSON to the current schema."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from story_cards.adapters.observability import configure_runtime_logging
from story_cards.adapters.story_json_files import (
    load_stories_json,
    read_raw_stories,
    save_raw_stories,
    save_stories_json,
)
from story_cards.core.story_schema import normalize_story_card

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    """Define CLI flags for story normalization."""
    parser = argparse.ArgumentParser(
        description="Normalize persisted story cards of any schema revision."
    )
    parser.add_argument("--input", required=True, help="Path to a JSON array of story cards.")
    parser.add_argument(
        "--output",
        default="",
        help="Optional path to write normalized JSON. Defaults to in-place.",
    )
    parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Only backfill legacy fields; skip validation of mandatory fields.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Normalize story JSON and write it back in canonical form."""
    configure_runtime_logging()
    parser = build_arg_parser()
    parsed = parser.parse_args(argv)

    input_path = Path(str(parsed.input))
    output_path = Path(str(parsed.output)) if str(parsed.output).strip() else input_path
    if parsed.no_validate:
        stories = [normalize_story_card(raw) for raw in read_raw_stories(input_path)]
        save_raw_stories(output_path, stories)
        count = len(stories)
    else:
        collection = load_stories_json(input_path)
        save_stories_json(output_path, collection)
        count = len(collection)
    logger.info("cli.normalize input=%s output=%s count=%s", input_path, output_path, count)
    print(f"Normalized {count} stories: {input_path}")
    if output_path != input_path:
        print(f"Wrote normalized JSON: {output_path}")


if __name__ == "__main__":
    main()
