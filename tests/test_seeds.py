"""Tests for almanac.seeds initial range construction."""

from __future__ import annotations

import pytest

from almanac.seeds import build_initial_ranges, ids_as_single_ranges, ids_to_ranges
from almanac.types import IdRange, InvalidIdRangeError


class TestSeedVariants:
    def test_single_ids_become_length_one_ranges(self) -> None:
        assert ids_as_single_ranges([79, 14]) == [IdRange("seed", 79, 1), IdRange("seed", 14, 1)]

    def test_pairs_become_start_length_ranges(self) -> None:
        assert ids_to_ranges([79, 14, 55, 13]) == [IdRange("seed", 79, 14), IdRange("seed", 55, 13)]

    def test_odd_pair_list_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="even number"):
            ids_to_ranges([79, 14, 55])

    def test_zero_length_pair_fails_fast(self) -> None:
        with pytest.raises(InvalidIdRangeError):
            ids_to_ranges([79, 0])

    def test_custom_category(self) -> None:
        assert ids_as_single_ranges([3], category="soil") == [IdRange("soil", 3, 1)]

    def test_dispatch(self) -> None:
        ids = [79, 14, 55, 13]
        assert build_initial_ranges(ids, "single") == ids_as_single_ranges(ids)
        assert build_initial_ranges(ids, "ranges") == ids_to_ranges(ids)

    def test_unknown_variant(self) -> None:
        with pytest.raises(ValueError, match="unknown seed variant"):
            build_initial_ranges([1, 2], "pairs")  # type: ignore[arg-type]
