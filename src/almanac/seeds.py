"""Initial id range construction for the two seed-list readings."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal, TypeAlias

from almanac.types import Category, IdRange


SeedVariant: TypeAlias = Literal["single", "ranges"]

SEED_VARIANTS: tuple[SeedVariant, ...] = ("single", "ranges")


def ids_as_single_ranges(ids: Sequence[int], category: Category = "seed") -> list[IdRange]:
    """One length-1 range per literal identifier."""
    return [IdRange(category, int(start), 1) for start in ids]


def ids_to_ranges(ids: Sequence[int], category: Category = "seed") -> list[IdRange]:
    """Read identifiers as consecutive ``(start, length)`` pairs."""
    if len(ids) % 2:
        raise ValueError(f"start/length pairs need an even number of ids, got {len(ids)}")
    return [
        IdRange(category, int(ids[index]), int(ids[index + 1]))
        for index in range(0, len(ids), 2)
    ]


def build_initial_ranges(
    ids: Sequence[int],
    variant: SeedVariant,
    *,
    category: Category = "seed",
) -> list[IdRange]:
    if variant == "single":
        return ids_as_single_ranges(ids, category)
    if variant == "ranges":
        return ids_to_ranges(ids, category)
    raise ValueError(f"unknown seed variant {variant!r}; expected one of {SEED_VARIANTS}")
