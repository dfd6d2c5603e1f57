"""Chain traversal: push id ranges through every category map to the terminal."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter

from almanac.graph import CategoryGraph, UnreachableCategoryError
from almanac.splitting import split_id_ranges
from almanac.types import Category, IdRange


log = logging.getLogger(__name__)


class CategoryMismatchError(RuntimeError):
    """Raised when one generation of id ranges spans more than one category."""


@dataclass(frozen=True, slots=True)
class GenerationStats:
    """Shape of one range-set generation."""

    category: Category
    range_count: int
    total_length: int


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Answer plus the per-generation trace that produced it."""

    target: Category
    nearest: int
    final_ranges: tuple[IdRange, ...]
    generations: tuple[GenerationStats, ...]
    elapsed_sec: float


def _shared_category(id_ranges: list[IdRange]) -> Category:
    if not id_ranges:
        raise ValueError("cannot progress an empty set of id ranges")
    category = id_ranges[0].category
    for row in id_ranges[1:]:
        if row.category != category:
            raise CategoryMismatchError(
                f"id ranges disagree on category: {category!r} and {row.category!r}",
            )
    return category


def _stats(id_ranges: list[IdRange]) -> GenerationStats:
    return GenerationStats(
        category=_shared_category(id_ranges),
        range_count=len(id_ranges),
        total_length=sum(row.length for row in id_ranges),
    )


def progress_id_ranges(id_ranges: list[IdRange], graph: CategoryGraph) -> list[IdRange]:
    """Advance every range by one category."""
    category = _shared_category(id_ranges)
    return split_id_ranges(id_ranges, graph.map_for(category))


def _progress_with_trace(
    id_ranges: list[IdRange],
    target: Category,
    graph: CategoryGraph,
) -> tuple[list[IdRange], list[GenerationStats]]:
    current = list(id_ranges)
    trace = [_stats(current)]
    # Each step consumes one map, so a valid walk never exceeds the map count.
    remaining_steps = len(graph.maps)
    while trace[-1].category != target:
        current = progress_id_ranges(current, graph)
        remaining_steps -= 1
        if remaining_steps < 0:
            raise UnreachableCategoryError(
                f"{target!r} not reached from {trace[0].category!r} after {len(graph.maps)} steps",
            )
        trace.append(_stats(current))
        log.debug(
            "%s: %d ranges covering %d ids",
            trace[-1].category,
            trace[-1].range_count,
            trace[-1].total_length,
        )
    return current, trace


def progress_id_ranges_to(
    id_ranges: list[IdRange],
    target: Category,
    graph: CategoryGraph,
) -> list[IdRange]:
    """Advance ranges category by category until they are in ``target``."""
    final, _ = _progress_with_trace(id_ranges, target, graph)
    return final


def find_nearest(
    id_ranges: list[IdRange],
    graph: CategoryGraph,
    target: Category | None = None,
) -> int:
    """Lowest identifier reachable in ``target`` (the graph's terminal by default)."""
    final = progress_id_ranges_to(id_ranges, target or graph.terminal, graph)
    return min(row.start for row in final)


def run_pipeline(
    id_ranges: list[IdRange],
    graph: CategoryGraph,
    *,
    target: Category | None = None,
) -> PipelineResult:
    """Run the full traversal and keep per-generation diagnostics."""

    started = perf_counter()
    goal = target or graph.terminal
    final, trace = _progress_with_trace(id_ranges, goal, graph)
    nearest = min(row.start for row in final)
    elapsed = perf_counter() - started
    log.info(
        "reached %s from %d ranges in %d steps; nearest=%d",
        goal,
        trace[0].range_count,
        len(trace) - 1,
        nearest,
    )
    return PipelineResult(
        target=goal,
        nearest=nearest,
        final_ranges=tuple(final),
        generations=tuple(trace),
        elapsed_sec=round(elapsed, 6),
    )


def pipeline_result_to_dict(result: PipelineResult, *, include_ranges: bool = False) -> dict[str, object]:
    """Serialize a pipeline result for reports."""

    payload: dict[str, object] = {
        "target": result.target,
        "nearest": result.nearest,
        "final_range_count": len(result.final_ranges),
        "generations": [
            {
                "category": row.category,
                "range_count": row.range_count,
                "total_length": row.total_length,
            }
            for row in result.generations
        ],
        "elapsed_sec": result.elapsed_sec,
    }
    if include_ranges:
        payload["final_ranges"] = [
            {"start": row.start, "length": row.length}
            for row in sorted(result.final_ranges, key=lambda row: (row.start, row.length))
        ]
    return payload
