"""Check that story_cards layers only import the layers they may depend on."""

from __future__ import annotations

import ast
import sys
from importlib.util import resolve_name
from pathlib import Path

PACKAGE = "story_cards"
PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_SOURCE_ROOT = PROJECT_ROOT / "src" / PACKAGE
KNOWN_LAYERS = {"api", "core", "adapters", "cli"}
FORBIDDEN: dict[str, set[str]] = {
    "core": {"api", "adapters", "cli"},
    "adapters": {"api", "cli"},
}


def _module_name(path: Path, source_root: Path) -> str:
    parts = path.relative_to(source_root).with_suffix("").parts
    if parts and parts[-1] == "__init__":
        parts = parts[:-1]
    return ".".join((PACKAGE, *parts))


def _layer_of(module: str) -> str | None:
    parts = module.split(".")
    if len(parts) < 2 or parts[0] != PACKAGE:
        return None
    return parts[1] if parts[1] in KNOWN_LAYERS else None


def _imported_modules(
    node: ast.Import | ast.ImportFrom, current_module: str, is_package: bool
) -> list[str]:
    if isinstance(node, ast.Import):
        return [alias.name for alias in node.names]
    if node.level == 0:
        base = node.module or ""
    else:
        anchor = current_module if is_package else current_module.rpartition(".")[0]
        try:
            base = resolve_name("." * node.level + (node.module or ""), anchor)
        except ImportError:
            return []
    # `from story_cards import core` names the layer in the alias list.
    return [base, *(f"{base}.{alias.name}" for alias in node.names)]


def check_file(path: Path, source_root: Path = DEFAULT_SOURCE_ROOT) -> list[str]:
    try:
        module = _module_name(path, source_root)
    except ValueError:
        return []
    layer = _layer_of(module)
    forbidden = FORBIDDEN.get(layer or "", set())
    if not forbidden:
        return []

    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    is_package = path.name == "__init__.py"
    violations: list[str] = []
    for node in ast.walk(tree):
        if not isinstance(node, (ast.Import, ast.ImportFrom)):
            continue
        imported_layers: set[str] = set()
        for name in _imported_modules(node, module, is_package):
            imported = _layer_of(name)
            if imported is not None:
                imported_layers.add(imported)
        for imported_layer in sorted(imported_layers & forbidden):
            violations.append(f"{path}: {layer} must not import {PACKAGE}.{imported_layer}")
    return violations


def check_import_boundaries(source_root: Path = DEFAULT_SOURCE_ROOT) -> list[str]:
    violations: list[str] = []
    for path in sorted(source_root.rglob("*.py")):
        violations.extend(check_file(path, source_root))
    return violations


def main() -> int:
    violations = check_import_boundaries()
    for violation in violations:
        print(violation, file=sys.stderr)
    if violations:
        return 1
    print("import boundary checks passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
