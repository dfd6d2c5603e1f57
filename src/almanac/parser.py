"""Almanac text parsing.

Input layout::

    seeds: 79 14 55 13

    seed-to-soil map:
    50 98 2
    52 50 48

    soil-to-fertilizer map:
    ...

Each map line is ``<destination_start> <source_start> <length>`` and becomes
an ``Interval(start=source_start, length=length, delta=destination_start -
source_start)``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from almanac.graph import CategoryGraph, build_category_graph
from almanac.types import Category, CategoryMap, Interval, build_category_map, parse_category


_SEEDS_RE = re.compile(r"^\s*seeds\s*:(?P<ids>.*)$", re.IGNORECASE)
_HEADER_RE = re.compile(r"^\s*(?P<source>[A-Za-z]+)-to-(?P<destination>[A-Za-z]+)\s+map\s*:\s*$")
_INT_RE = re.compile(r"^[+-]?\d+$")


class AlmanacParseError(ValueError):
    """Raised for malformed almanac text; carries the 1-based line number."""

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        self.line_number = line_number
        where = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{where}{message}")


@dataclass(frozen=True, slots=True)
class ParsedAlmanac:
    seeds: tuple[int, ...]
    graph: CategoryGraph


def _parse_ints(text: str, *, line_number: int) -> list[int]:
    values: list[int] = []
    for part in text.split():
        if not _INT_RE.match(part):
            raise AlmanacParseError(f"expected an integer, got {part!r}", line_number=line_number)
        values.append(int(part))
    return values


def parse_seeds(line: str, *, line_number: int = 1) -> tuple[int, ...]:
    match = _SEEDS_RE.match(line)
    if match is None:
        raise AlmanacParseError("expected 'seeds: <ids>'", line_number=line_number)
    seeds = _parse_ints(match.group("ids"), line_number=line_number)
    if not seeds:
        raise AlmanacParseError("seed list is empty", line_number=line_number)
    return tuple(seeds)


def parse_map_header(line: str, *, line_number: int = 1) -> tuple[Category, Category]:
    match = _HEADER_RE.match(line)
    if match is None:
        raise AlmanacParseError(f"expected '<from>-to-<to> map:', got {line.strip()!r}", line_number=line_number)
    try:
        return parse_category(match.group("source")), parse_category(match.group("destination"))
    except ValueError as exc:
        raise AlmanacParseError(str(exc), line_number=line_number) from exc


def parse_interval_line(line: str, *, line_number: int = 1) -> Interval:
    values = _parse_ints(line, line_number=line_number)
    if len(values) != 3:
        raise AlmanacParseError(
            f"expected '<destination> <source> <length>', got {len(values)} values",
            line_number=line_number,
        )
    destination_start, source_start, length = values
    try:
        return Interval(start=source_start, length=length, delta=destination_start - source_start)
    except ValueError as exc:
        raise AlmanacParseError(str(exc), line_number=line_number) from exc


def _blocks(text: str) -> list[list[tuple[int, str]]]:
    """Group non-blank lines into blank-line separated blocks, keeping line numbers."""
    blocks: list[list[tuple[int, str]]] = []
    current: list[tuple[int, str]] = []
    for line_number, raw in enumerate(text.splitlines(), start=1):
        if raw.strip():
            current.append((line_number, raw))
        elif current:
            blocks.append(current)
            current = []
    if current:
        blocks.append(current)
    return blocks


def parse_almanac(
    text: str,
    *,
    source: Category = "seed",
    terminal: Category = "location",
) -> ParsedAlmanac:
    """Parse almanac text into seed ids plus a validated category graph."""

    blocks = _blocks(text)
    if not blocks:
        raise AlmanacParseError("almanac is empty")

    seeds_block = blocks[0]
    if len(seeds_block) != 1:
        raise AlmanacParseError("seeds line must be followed by a blank line", line_number=seeds_block[1][0])
    seeds = parse_seeds(seeds_block[0][1], line_number=seeds_block[0][0])

    maps: list[CategoryMap] = []
    for block in blocks[1:]:
        header_line, header = block[0]
        map_source, map_destination = parse_map_header(header, line_number=header_line)
        intervals = [parse_interval_line(raw, line_number=line_number) for line_number, raw in block[1:]]
        try:
            maps.append(build_category_map(map_source, map_destination, intervals))
        except ValueError as exc:
            raise AlmanacParseError(str(exc), line_number=header_line) from exc

    return ParsedAlmanac(
        seeds=seeds,
        graph=build_category_graph(maps, source=source, terminal=terminal),
    )


def load_almanac(
    path: Path,
    *,
    source: Category = "seed",
    terminal: Category = "location",
) -> ParsedAlmanac:
    return parse_almanac(path.read_text(encoding="utf-8"), source=source, terminal=terminal)
