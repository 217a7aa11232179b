"""CLI that prints resolved render parameters for persisted story cards."""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path

from story_cards.adapters.observability import configure_runtime_logging
from story_cards.adapters.story_json_files import load_stories_json
from story_cards.core.render_resolver import resolve_collection_render


def build_arg_parser() -> argparse.ArgumentParser:
    """Define CLI flags for render resolution."""
    parser = argparse.ArgumentParser(
        description="Resolve layout, typography and hover visuals for story cards."
    )
    parser.add_argument("--input", required=True, help="Path to a JSON array of story cards.")
    parser.add_argument("--output", default="", help="Optional JSON output path; prints otherwise.")
    parser.add_argument("--indent", type=int, default=2)
    return parser


def main(argv: list[str] | None = None) -> None:
    configure_runtime_logging()
    parser = build_arg_parser()
    parsed = parser.parse_args(argv)

    collection = load_stories_json(Path(str(parsed.input)))
    bundles = [asdict(bundle) for bundle in resolve_collection_render(collection)]
    text = json.dumps(bundles, indent=max(0, int(parsed.indent)), ensure_ascii=False)
    output = str(parsed.output).strip()
    if not output:
        print(text)
        return
    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text + "\n", encoding="utf-8")
    print(f"Wrote {len(bundles)} render bundles: {output_path}")


if __name__ == "__main__":
    main()
