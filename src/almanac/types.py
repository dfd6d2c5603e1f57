"""Core types for the almanac range pipeline."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal, TypeAlias, cast


Category: TypeAlias = Literal[
    "seed",
    "soil",
    "fertilizer",
    "water",
    "light",
    "temperature",
    "humidity",
    "location",
]

CATEGORY_ORDER: tuple[Category, ...] = (
    "seed",
    "soil",
    "fertilizer",
    "water",
    "light",
    "temperature",
    "humidity",
    "location",
)
_CATEGORY_RANK: dict[str, int] = {name: rank for rank, name in enumerate(CATEGORY_ORDER)}


class InvalidIdRangeError(ValueError):
    """Raised when an id range is built with a non-positive length."""


def parse_category(name: str) -> Category:
    """Validate a category token (case-insensitive, surrounding blanks ignored)."""
    token = (name or "").strip().lower()
    if token not in _CATEGORY_RANK:
        raise ValueError(f"unknown category {name!r}")
    return cast(Category, token)


def category_rank(category: Category) -> int:
    return _CATEGORY_RANK[category]


@dataclass(frozen=True, slots=True)
class Interval:
    """Half-open source range ``[start, start + length)`` shifted by ``delta``."""

    start: int
    length: int
    delta: int = 0

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError(f"interval length must be > 0, got {self.length}")

    @property
    def end(self) -> int:
        return self.start + self.length

    def contains(self, value: int) -> bool:
        return self.start <= value < self.end


@dataclass(frozen=True, slots=True)
class IdRange:
    """Contiguous block of identifiers living in one category's space."""

    category: Category
    start: int
    length: int

    def __post_init__(self) -> None:
        if self.category not in _CATEGORY_RANK:
            raise ValueError(f"unknown category {self.category!r}")
        if self.length <= 0:
            raise InvalidIdRangeError(
                f"id range length must be > 0, got {self.length} (start={self.start})",
            )

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True, slots=True)
class CategoryMap:
    """Ordered, disjoint intervals mapping ``source`` ids onto ``destination`` ids.

    Use ``build_category_map`` when the intervals come in arbitrary order;
    the constructor itself only accepts an already sorted sequence.
    """

    source: Category
    destination: Category
    ranges: tuple[Interval, ...]

    def __post_init__(self) -> None:
        for category in (self.source, self.destination):
            if category not in _CATEGORY_RANK:
                raise ValueError(f"unknown category {category!r}")
        if self.source == self.destination:
            raise ValueError(f"category map cannot map {self.source!r} onto itself")
        for previous, current in zip(self.ranges, self.ranges[1:]):
            if current.start < previous.start:
                raise ValueError(
                    f"{self.source}->{self.destination} intervals must be sorted by start, "
                    f"got {current.start} after {previous.start}",
                )
            if current.start < previous.end:
                raise ValueError(
                    f"{self.source}->{self.destination} intervals overlap: "
                    f"[{previous.start}, {previous.end}) and [{current.start}, {current.end})",
                )

    def map_value(self, value: int) -> int:
        """Map one identifier; values outside every interval pass through."""
        for interval in self.ranges:
            if value < interval.start:
                break
            if interval.contains(value):
                return value + interval.delta
        return value


def build_category_map(
    source: Category,
    destination: Category,
    intervals: Iterable[Interval],
) -> CategoryMap:
    """Build a category map, sorting intervals ascending by start."""

    ordered = sorted(intervals, key=lambda row: (row.start, row.length, row.delta))
    return CategoryMap(source=source, destination=destination, ranges=tuple(ordered))
