"""Category graph: the linear chain of category maps from source to terminal."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from almanac.types import (
    Category,
    CategoryMap,
    Interval,
    build_category_map,
    category_rank,
    parse_category,
)


class MalformedGraphError(ValueError):
    """Raised when category maps do not form a single source-to-terminal chain."""


class UnreachableCategoryError(RuntimeError):
    """Raised when traversal needs a category map the graph does not have."""


@dataclass(frozen=True, slots=True)
class CategoryGraph:
    """Read-only lookup from category to its outgoing map.

    Construction walks the chain from ``source`` and refuses graphs that
    cycle, stop short of ``terminal``, or carry maps off the chain.
    """

    maps: Mapping[Category, CategoryMap]
    source: Category = "seed"
    terminal: Category = "location"

    def __post_init__(self) -> None:
        object.__setattr__(self, "maps", MappingProxyType(dict(self.maps)))
        for key, category_map in self.maps.items():
            if key != category_map.source:
                raise MalformedGraphError(
                    f"map keyed by {key!r} starts at {category_map.source!r}",
                )
        if self.source == self.terminal:
            raise MalformedGraphError(f"source and terminal are both {self.source!r}")
        if category_rank(self.source) > category_rank(self.terminal):
            raise MalformedGraphError(
                f"terminal {self.terminal!r} comes before source {self.source!r}",
            )
        if self.terminal in self.maps:
            raise MalformedGraphError(
                f"terminal category {self.terminal!r} must not have an outgoing map",
            )

        visited: list[Category] = [self.source]
        current = self.source
        while current != self.terminal:
            category_map = self.maps.get(current)
            if category_map is None:
                raise MalformedGraphError(
                    f"no map leaves {current!r} (chain so far: {' -> '.join(visited)})",
                )
            current = category_map.destination
            if current in visited:
                raise MalformedGraphError(
                    f"cycle at {current!r} (chain so far: {' -> '.join(visited)})",
                )
            if category_rank(current) < category_rank(category_map.source):
                raise MalformedGraphError(
                    f"map {category_map.source}->{current} runs against category order",
                )
            visited.append(current)

        detached = sorted(set(self.maps) - set(visited))
        if detached:
            raise MalformedGraphError(f"maps off the {self.source}->{self.terminal} chain: {detached}")

    def chain(self) -> tuple[Category, ...]:
        """Categories in traversal order, source first, terminal last."""
        ordered: list[Category] = [self.source]
        while ordered[-1] != self.terminal:
            ordered.append(self.maps[ordered[-1]].destination)
        return tuple(ordered)

    def map_for(self, category: Category) -> CategoryMap:
        category_map = self.maps.get(category)
        if category_map is None:
            raise UnreachableCategoryError(f"no category map leaves {category!r}")
        return category_map


def build_category_graph(
    maps: Iterable[CategoryMap],
    *,
    source: Category = "seed",
    terminal: Category = "location",
) -> CategoryGraph:
    """Index category maps by source and validate the resulting chain."""

    by_source: dict[Category, CategoryMap] = {}
    for category_map in maps:
        if category_map.source in by_source:
            raise MalformedGraphError(f"more than one map leaves {category_map.source!r}")
        by_source[category_map.source] = category_map
    return CategoryGraph(maps=by_source, source=source, terminal=terminal)


def category_graph_to_dict(graph: CategoryGraph) -> dict[str, object]:
    """Serialize graph to deterministic JSON-safe dict (chain order)."""

    chain = graph.chain()
    return {
        "source": graph.source,
        "terminal": graph.terminal,
        "chain": list(chain),
        "maps": [
            {
                "source": graph.maps[category].source,
                "destination": graph.maps[category].destination,
                "ranges": [
                    {"start": row.start, "length": row.length, "delta": row.delta}
                    for row in graph.maps[category].ranges
                ],
            }
            for category in chain[:-1]
        ],
    }


def category_graph_from_dict(payload: Mapping[str, Any]) -> CategoryGraph:
    """Rebuild a graph from ``category_graph_to_dict`` output."""

    maps: list[CategoryMap] = []
    for row in payload.get("maps", []):
        maps.append(
            build_category_map(
                parse_category(str(row["source"])),
                parse_category(str(row["destination"])),
                (
                    Interval(
                        start=int(interval["start"]),
                        length=int(interval["length"]),
                        delta=int(interval.get("delta", 0)),
                    )
                    for interval in row.get("ranges", [])
                ),
            ),
        )
    return build_category_graph(
        maps,
        source=parse_category(str(payload.get("source", "seed"))),
        terminal=parse_category(str(payload.get("terminal", "location"))),
    )
