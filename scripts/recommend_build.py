"""Recommend a build from free text or filter JSON.

Usage examples:
    python -m scripts.recommend_build --text "High recovery Warlock void build for raids"
    python -m scripts.recommend_build --filters-json '{"class":"titan","activity":"pvp"}'
    python -m scripts.recommend_build --text "solar hunter" --catalog-file catalog.json --json
    python -m scripts.recommend_build --text "void warlock" --inventory 0x7d0 --inventory 2001
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from d2_planner.catalog.sample import sample_catalog
from d2_planner.engine.composer import CompositionError
from d2_planner.engine.export_state import recommendation_to_dict
from d2_planner.engine.ui_model import BuildUiModel
from d2_planner.models.build import Build
from d2_planner.optimizer.recommend import (
    Recommendation,
    RecommendationOptions,
    generate_recommendation,
)
from d2_planner.parser.catalog_parser import load_catalog


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s - %(message)s",
    )


def _parse_int_like(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("bool is not a valid integer value")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip(), 0)
    raise ValueError(f"Expected integer-like value, got: {value!r}")


def _load_json_arg(raw_json: str | None, file_path: Path | None) -> dict[str, Any] | None:
    if raw_json is not None:
        payload = json.loads(raw_json)
    elif file_path is not None:
        payload = json.loads(file_path.read_text())
    else:
        return None
    if not isinstance(payload, dict):
        raise ValueError("JSON payload must be an object")
    return payload


def _options_from_args(args: argparse.Namespace) -> RecommendationOptions:
    inventory = [_parse_int_like(v) for v in args.inventory] if args.inventory else None
    return RecommendationOptions(
        use_inventory_only=inventory is not None,
        inventory=inventory,
        locked_exotic=(
            _parse_int_like(args.lock_exotic) if args.lock_exotic is not None else None
        ),
        include_alternatives=args.alternatives > 0,
        alternatives_count=args.alternatives,
        max_workers=args.workers,
    )


def _render_build(build: Build, heading: str) -> list[str]:
    lines = [f"{heading}: {build.name}", f"  {build.description}"]
    score = build.score
    if score is not None:
        lines.append(f"  score: {score.total} ({score.tier})")
        for category, value in score.breakdown.items():
            lines.append(f"    {category:<22} {value:>3}")
    ui = BuildUiModel(build)
    lines.append("  loadout:")
    for entry in ui.loadout_entries():
        marker = " *" if entry.exotic else ""
        lines.append(f"    {entry.kind:<8} {entry.slot:<13} {entry.label}{marker}")
    lines.append("  stats:")
    for row in ui.stat_rows():
        flag = " [secondary]" if row.breakpoint_active else ""
        lines.append(f"    {row.label:<11} {row.value:>3}  T{row.tier}{flag}")
    if build.synergies:
        lines.append("  synergies:")
        lines.extend(f"    - {line}" for line in ui.synergy_lines())
    if score is not None and score.recommendations:
        lines.append("  recommendations:")
        lines.extend(f"    - {msg}" for msg in score.recommendations)
    if score is not None and score.optimizations:
        lines.append("  optimizations:")
        lines.extend(f"    - {msg}" for msg in score.optimizations)
    return lines


def _render_text_result(result: Recommendation) -> str:
    lines: list[str] = [f"confidence: {result.confidence}"]
    if result.warnings:
        lines.append("warnings:")
        lines.extend(f"  - {msg}" for msg in result.warnings)
    lines.append("")
    lines.extend(_render_build(result.primary, "primary"))
    for index, build in enumerate(result.alternatives, start=1):
        lines.append("")
        lines.extend(_render_build(build, f"alternative {index}"))
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Recommend a build from text or filters")
    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument("--text", type=str, help="Free-text build request.")
    input_group.add_argument("--filters-json", type=str, help="Inline filter JSON object.")
    input_group.add_argument("--filters-file", type=Path, help="Path to filter JSON file.")
    parser.add_argument("--catalog-file", type=Path, help="Catalog JSON; defaults to the sample catalog.")
    parser.add_argument(
        "--inventory",
        action="append",
        help="Owned item hash; repeat to restrict armor and weapons to the inventory.",
    )
    parser.add_argument("--lock-exotic", type=str, help="Exotic item hash to build around.")
    parser.add_argument("--alternatives", type=int, default=3, help="Number of alternatives (0 disables).")
    parser.add_argument("--workers", type=int, default=None, help="Thread pool size for alternatives.")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON output.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    filters = _load_json_arg(args.filters_json, args.filters_file)
    user_input: str | dict[str, Any] = filters if filters is not None else args.text
    catalog = load_catalog(args.catalog_file) if args.catalog_file else sample_catalog()

    try:
        result = generate_recommendation(user_input, catalog, _options_from_args(args))
    except CompositionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(recommendation_to_dict(result), indent=2))
    else:
        print(_render_text_result(result))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
