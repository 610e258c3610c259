"""
1) Load the family data (CSV or GEDCOM) into a relationship graph.
2) Report data anomalies the layout will degrade around.
3) Compute the family layout: generations, trees, sizes and positions.
4) Optionally export positions as JSON and plot the chart.
"""

import argparse
from dataclasses import replace
import json
import logging
from pathlib import Path
import sys

from layout import compute_layout
from models import LayoutConfig
from parsing import load_graph
from plotting import plot_layout
from validation import validate_graph


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lay out a family tree as a 2D chart.")
    parser.add_argument("input", type=Path, help="family CSV or GEDCOM file")
    parser.add_argument("--json", type=Path, help="write positions and bounding box as JSON")
    parser.add_argument("--plot", type=Path, help="save the chart (png, svg or pdf)")
    parser.add_argument("--show", action="store_true", help="display the chart interactively")
    parser.add_argument("--focus", help="id or name of the person to highlight on the chart")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    spacing = parser.add_argument_group("spacing (pixels)")
    defaults = LayoutConfig()
    for name in ("box_width", "box_height", "generation_gap", "sibling_gap", "spouse_gap", "tree_gap"):
        spacing.add_argument(
            f"--{name.replace('_', '-')}", dest=name, type=int, default=getattr(defaults, name)
        )
    return parser


def config_from_args(args: argparse.Namespace) -> LayoutConfig:
    return replace(
        LayoutConfig(),
        box_width=args.box_width,
        box_height=args.box_height,
        generation_gap=args.generation_gap,
        sibling_gap=args.sibling_gap,
        spouse_gap=args.spouse_gap,
        tree_gap=args.tree_gap,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.input.exists():
        print(f"Error: {args.input} not found", file=sys.stderr)
        return 1

    print(f"Loading family data: {args.input}")
    graph = load_graph(args.input)
    print(f"  Found {len(graph)} people")

    print("Validating graph...")
    warnings = validate_graph(graph)
    if warnings:
        print(f"  Found {len(warnings)} data warnings:")
        for w in warnings[:10]:  # Show first 10 warnings
            print(f"    - {w}")
        if len(warnings) > 10:
            print(f"    ... and {len(warnings) - 10} more")
    else:
        print("  No data issues found")

    config = config_from_args(args)
    print("Computing layout...")
    layout = compute_layout(graph, config)
    unplaced = len(graph) - len(layout.positions)
    print(f"  Placed {len(layout.positions)} people in {layout.width}x{layout.height}")
    if unplaced:
        print(f"  {unplaced} people unreachable from any root were not placed")

    if args.json:
        args.json.write_text(json.dumps(layout.to_dict(), indent=2), encoding="utf-8")
        print(f"Layout written to {args.json}")

    if args.plot or args.show:
        plot_layout(graph, layout, config, args.plot, focus=args.focus)

    print("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
