"""Tests for floor/unit range selection and floor compatibility."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from engine.range_selection import (
    available_floor_codes, available_unit_suffixes, check_compatibility,
    resolve_range, run_range_selection, unit_suffix,
)
from models.building import Tower
from models.outcome import FLOOR_INCOMPATIBILITY
from tower_factory import make_block, make_tower, make_unit


def make_two_block_tower():
    return Tower(1, "T", [
        make_block(1, "A", ["1", "2", "3"], first_unit_id=1000),
        make_block(2, "B", ["1", "2"], first_unit_id=2000),
    ])


class TestUnitSuffix:
    def test_number_preferred_over_code(self):
        assert unit_suffix(make_unit(1, 1, 1, "105", "X-9")) == "105"
        assert unit_suffix(make_unit(1, 1, 1, "105", "X-9"), "1") == "5"

    def test_falls_back_to_code(self):
        assert unit_suffix(make_unit(1, 1, 4, code="A-4-08"), "4") == "8"

    def test_unlabelled(self):
        assert unit_suffix(make_unit(1, 1, 1)) is None


class TestResolveRange:
    def test_floor_prefixed_numbers(self):
        ids = resolve_range([10], "1", "1", "1", "2", make_tower())
        assert ids == frozenset({1, 2})

    def test_across_floors(self):
        ids = resolve_range([10], "1", "4", "1", "1", make_tower())
        assert ids == frozenset({1, 4, 6})

    def test_code_suffix_in_range(self):
        ids = resolve_range([10], "4", "4", "5", "10", make_tower())
        assert ids == frozenset({7})

    def test_numeric_not_lexical(self):
        tower = Tower(1, "T", [make_block(1, "A", ["1"], units_per_floor=12)])
        ids = resolve_range([1], "1", "1", "2", "10", tower)
        assert len(ids) == 9

    def test_padded_bounds(self):
        assert resolve_range([10], "1", "1", "01", "02", make_tower()) == frozenset({1, 2})

    def test_reversed_bounds_are_swapped(self):
        tower = make_tower()
        forward = resolve_range([10], "1", "3", "1", "2", tower)
        assert resolve_range([10], "3", "1", "2", "1", tower) == forward

    def test_multiple_blocks(self):
        tower = make_two_block_tower()
        ids = resolve_range([1, 2], "2", "3", "1", "1", tower)
        assert ids == frozenset({1002, 1004, 2002})

    def test_block_order_does_not_matter(self):
        tower = make_two_block_tower()
        assert resolve_range([1, 2], "1", "3", "1", "2", tower) == \
            resolve_range([2, 1], "1", "3", "1", "2", tower)

    def test_single_floor_single_suffix(self):
        tower = make_tower()
        for floor_code, suffix, expected in [("1", "3", {3}), ("2", "02", {5}), ("4", "8", {7}), ("3", "2", set())]:
            assert resolve_range([10], floor_code, floor_code, suffix, suffix, tower) == frozenset(expected)

    def test_raw_label_bounds(self):
        tower = make_tower()
        assert resolve_range([10], "1", "1", "101", "101", tower) == frozenset({1})
        assert resolve_range([10], "1", "1", "101", "2", tower) == frozenset({1, 2})

    def test_missing_bound_selects_nothing(self):
        tower = make_tower()
        assert resolve_range([10], "1", "4", "", "9", tower) == frozenset()
        assert resolve_range([10], None, "4", "1", "9", tower) == frozenset()
        assert resolve_range([10], "1", "4", "1", " ", tower) == frozenset()

    def test_unknown_blocks_ignored(self):
        assert resolve_range([10, 99], "1", "1", "1", "2", make_tower()) == frozenset({1, 2})
        assert resolve_range([99], "1", "1", "1", "2", make_tower()) == frozenset()

    def test_no_tower(self):
        assert resolve_range([10], "1", "1", "1", "2", None) == frozenset()

    def test_only_selected_ids_returned(self):
        tower = make_tower()
        ids = resolve_range([10], "1", "2", "1", "1", tower)
        for block, floor, unit in tower.iter_units():
            inside = block.block_id == 10 and floor.floor_code in ("1", "2") and \
                unit_suffix(unit, floor.floor_code) == "1"
            assert (unit.unit_id in ids) == inside


class TestGroundFloor:
    def test_non_numeric_floor_sorts_last(self):
        tower = Tower(1, "T", [make_block(1, "A", ["G", "1", "2"])])
        assert available_floor_codes([1], tower) == ["1", "2", "G"]

    def test_ground_floor_range(self):
        tower = Tower(1, "T", [make_block(1, "A", ["G", "1", "2"], first_unit_id=1)])
        assert resolve_range([1], "G", "G", "1", "2", tower) == frozenset({1, 2})


class TestCompatibility:
    def test_different_floor_sets(self):
        tower = make_two_block_tower()
        result = check_compatibility([1, 2], tower)
        assert result.compatible is False
        assert result.warning.kind == FLOOR_INCOMPATIBILITY
        assert result.floor_codes_by_block == {1: ["1", "2", "3"], 2: ["1", "2"]}

    def test_union_of_floor_codes(self):
        assert available_floor_codes([1, 2], make_two_block_tower()) == ["1", "2", "3"]

    def test_same_floor_sets(self):
        tower = Tower(1, "T", [
            make_block(1, "A", ["2", "1"], first_unit_id=1000),
            make_block(2, "B", ["1", "2"], first_unit_id=2000),
        ])
        result = check_compatibility([1, 2], tower)
        assert result.compatible is True
        assert result.warning is None

    def test_single_or_no_block(self):
        assert check_compatibility([1], make_two_block_tower()).compatible is True
        assert check_compatibility([], make_two_block_tower()).compatible is True

    def test_warning_carried_into_selection(self):
        result = run_range_selection([1, 2], "1", "2", "1", "1", make_two_block_tower())
        assert result.resolved_ids == frozenset({1000, 1002, 2000, 2002})
        assert [w.kind for w in result.warnings] == [FLOOR_INCOMPATIBILITY]


class TestAvailableUnitSuffixes:
    def test_suffixes_on_range(self):
        assert available_unit_suffixes([10], "1", "4", make_tower()) == ["1", "2", "3", "8"]

    def test_single_floor(self):
        assert available_unit_suffixes([20], "1", "1", make_tower()) == ["99"]

    def test_blank_floor_bound(self):
        assert available_unit_suffixes([10], "", "4", make_tower()) == []


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
