"""Split id ranges against a category map without materializing identifiers."""

from __future__ import annotations

from almanac.types import CategoryMap, IdRange


def split_id_range(id_range: IdRange, category_map: CategoryMap) -> list[IdRange]:
    """Partition ``id_range`` against ``category_map`` in one forward sweep.

    Sub-ranges falling into gaps keep their values; sub-ranges covered by an
    interval are shifted by that interval's delta. Every output range is
    tagged with the map's destination category and the pieces exactly cover
    ``[id_range.start, id_range.end)``.
    """

    if id_range.category != category_map.source:
        raise ValueError(
            f"id range is in {id_range.category!r} but map starts at {category_map.source!r}",
        )

    destination = category_map.destination
    range_end = id_range.end
    current = id_range.start
    pieces: list[IdRange] = []

    for interval in category_map.ranges:
        if interval.start > current:
            gap_end = min(interval.start, range_end)
            pieces.append(IdRange(destination, current, gap_end - current))
            current = interval.start

        if current >= range_end:
            break

        if interval.end > current:
            covered_end = min(interval.end, range_end)
            pieces.append(IdRange(destination, current + interval.delta, covered_end - current))
            current = covered_end

        if current >= range_end:
            break

    if current < range_end:
        pieces.append(IdRange(destination, current, range_end - current))

    return pieces


def split_id_ranges(id_ranges: list[IdRange], category_map: CategoryMap) -> list[IdRange]:
    """Split every range in order and concatenate the pieces."""
    return [piece for id_range in id_ranges for piece in split_id_range(id_range, category_map)]
