#!/usr/bin/env python3
"""Find the nearest terminal-category id for an almanac input file.

Runs the seed list through every category map, once per seed variant:
- single: each seed id is its own length-1 range
- ranges: seed ids are read as (start, length) pairs

Usage:
    python3 scripts/nearest_location.py --input res/day-5-input.txt
    python3 scripts/nearest_location.py --input almanac.txt --variant ranges -v

Structured JSON output goes to stdout; human messages go to stderr.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from almanac.config import PipelineConfig, load_pipeline_config, parse_variants
from almanac.graph import MalformedGraphError, UnreachableCategoryError
from almanac.io_utils import dumps_json, save_json
from almanac.parser import AlmanacParseError, load_almanac
from almanac.pipeline import CategoryMismatchError, pipeline_result_to_dict, run_pipeline
from almanac.seeds import build_initial_ranges
from almanac.types import InvalidIdRangeError, parse_category

log = logging.getLogger("nearest_location")


def dump_json(obj: object) -> None:
    sys.stdout.buffer.write(dumps_json(obj))
    sys.stdout.buffer.write(b"\n")
    sys.stdout.flush()


def build_report(
    input_path: Path,
    config: PipelineConfig,
    *,
    target: str | None = None,
    include_ranges: bool = False,
) -> dict[str, object]:
    """Parse the almanac and run every configured variant."""
    # The graph always spans the file's own chain; config only picks where to start and stop.
    almanac = load_almanac(input_path)
    goal = parse_category(target) if target else config.terminal
    log.info(
        "Loaded %d seed ids and chain %s",
        len(almanac.seeds),
        " -> ".join(almanac.graph.chain()),
    )

    results: dict[str, object] = {}
    for variant in config.variants:
        ranges = build_initial_ranges(almanac.seeds, variant, category=config.source)
        result = run_pipeline(ranges, almanac.graph, target=goal)
        log.info("The nearest %s id from %s seeds is: %d", goal, variant, result.nearest)
        results[variant] = pipeline_result_to_dict(result, include_ranges=include_ranges)

    return {
        "input": str(input_path),
        "source": config.source,
        "target": goal,
        "seed_count": len(almanac.seeds),
        "chain": list(almanac.graph.chain()),
        "results": results,
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Nearest terminal-category id for an almanac file."
    )
    parser.add_argument(
        "--input", type=Path, required=True,
        help="Path to the almanac text file",
    )
    parser.add_argument(
        "--variant",
        choices=["single", "ranges", "both"],
        default=None,
        help="Seed reading to run (default: from config, else both)",
    )
    parser.add_argument(
        "--config", type=Path, default=None,
        help="Optional JSON config (source, terminal, variants)",
    )
    parser.add_argument(
        "--target", default=None,
        help="Stop at this category instead of the configured terminal",
    )
    parser.add_argument(
        "--output", type=Path, default=None,
        help="Also write the JSON report to this path",
    )
    parser.add_argument(
        "--include-ranges",
        action="store_true",
        help="Include the final ranges in the report",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    if not args.input.exists():
        log.error("almanac not found at %s", args.input)
        return 1

    try:
        config = load_pipeline_config(args.config)
        if args.variant:
            config = PipelineConfig(
                source=config.source,
                terminal=config.terminal,
                variants=parse_variants(args.variant),
            )
        report = build_report(
            args.input,
            config,
            target=args.target,
            include_ranges=args.include_ranges,
        )
    except (AlmanacParseError, MalformedGraphError) as exc:
        log.error("invalid almanac %s: %s", args.input, exc)
        return 1
    except (InvalidIdRangeError, UnreachableCategoryError, CategoryMismatchError, OSError, ValueError) as exc:
        log.error("%s", exc)
        return 1

    if args.output is not None:
        save_json(report, args.output, pretty=True)
        log.info("Report written to %s", args.output)
    dump_json(report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
