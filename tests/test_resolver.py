"""Tests for visual token -> unit id resolution."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from components.charts import unit_grid
from data.loader import parse_inventory
from data.sample_data import generate_inventory_df
from engine.inventory_index import build_index, visual_key
from engine.key_normalizer import endpoint_sort_key
from engine.resolver import (
    RESOLUTION_STRATEGIES, parse_structured_token, resolve_batch, resolve_token,
)
from models.outcome import UNRESOLVED_TOKEN
from tower_factory import make_tower, make_unit


def make_index():
    return build_index(make_tower())


class TestStrategies:
    def test_cascade_order(self):
        names = [name for name, _ in RESOLUTION_STRATEGIES]
        assert names == [
            "direct_hit", "structured_pattern", "literal_id",
            "trailing_numeric_run", "segment_scan",
        ]

    def test_direct_hit(self):
        assert resolve_token("unit-A-1-101", make_index()) == (1, "direct_hit")
        assert resolve_token("unit-A-4-A-4-08", make_index()) == (7, "direct_hit")

    def test_code_suffix_token_resolves(self):
        unit_id, _ = resolve_token("unit-A-4-8", make_index())
        assert unit_id == 7

    def test_structured_pattern_from_raw_units(self):
        unit = make_unit(7, 103, 4, code="A-4-08")
        index = build_index(None)
        assert resolve_token("unit-A-4-8", index, [unit]) == (7, "structured_pattern")

    def test_structured_pattern_uses_floor(self):
        unit = make_unit(7, 103, 4, code="A-4-08")
        unit_id, strategy = resolve_token("unit-A-3-8", build_index(None), [unit])
        assert strategy != "structured_pattern"

    def test_literal_id(self):
        assert resolve_token("6", make_index()) == (6, "literal_id")

    def test_unit_number_match(self):
        assert resolve_token("99", make_index()) == (8, "trailing_numeric_run")

    def test_segment_scan(self):
        assert resolve_token("blk_8_x12345", make_index()) == (8, "segment_scan")


class TestParseStructuredToken:
    def test_simple(self):
        assert parse_structured_token("unit-A-4-8") == ("A", 4, 8)

    def test_block_label_with_dashes(self):
        assert parse_structured_token("unit-North-A-12-3") == ("North-A", 12, 3)

    def test_rejects_non_integer_tail(self):
        assert parse_structured_token("unit-A-4-PH") is None
        assert parse_structured_token("unit-A-G-1") is None

    def test_rejects_wrong_prefix_or_length(self):
        assert parse_structured_token("cell-A-4-8") is None
        assert parse_structured_token("unit-4-8") is None


class TestUnresolved:
    def test_garbage(self):
        assert resolve_token("garbage", make_index()) == (None, None)

    def test_unknown_structured_token(self):
        assert resolve_token("unit-Q-50-77", make_index()) == (None, None)

    def test_blank(self):
        assert resolve_token("", make_index()) == (None, None)
        assert resolve_token("   ", make_index()) == (None, None)
        assert resolve_token(None, make_index()) == (None, None)

    def test_never_invents_ids(self):
        index = make_index()
        for token in ["12", "unit-A-9-9", "4444", "x-77-y"]:
            unit_id, _ = resolve_token(token, index)
            assert unit_id is None or unit_id in index.units_by_id


class TestResolveBatch:
    def test_dedupes_and_reports(self):
        tokens = ["unit-A-1-101", "unit-A-1-1", "99", "garbage", "garbage"]
        result = resolve_batch(tokens, make_index())
        assert result.resolved_ids == frozenset({1, 8})
        assert result.unresolved_count == 1
        assert result.unresolved_tokens == ["garbage"]
        assert set(result.matched_by) == {"unit-A-1-101", "unit-A-1-1", "99"}

    def test_unresolved_tokens_become_warnings(self):
        result = resolve_batch(["garbage", "unit-Q-50-77"], make_index())
        assert result.resolved_ids == frozenset()
        assert [w.kind for w in result.warnings] == [UNRESOLVED_TOKEN, UNRESOLVED_TOKEN]
        assert [w.subject for w in result.warnings] == ["garbage", "unit-Q-50-77"]

    def test_empty_batch(self):
        result = resolve_batch([], make_index())
        assert result.resolved_ids == frozenset()
        assert result.unresolved_count == 0
        assert result.warnings == []


class TestSampleGridTokens:
    def test_positions_match_sample_numbering(self):
        tower = parse_inventory(generate_inventory_df())
        index = build_index(tower)
        for block in tower.blocks:
            for floor in block.floors:
                for position, unit in enumerate(floor.units, start=1):
                    token = visual_key(block.label, floor.floor_number, position)
                    unit_id, _ = resolve_token(token, index)
                    assert unit_id == unit.unit_id, token

    def test_grid_handle_tokens_resolve(self):
        tower = parse_inventory(generate_inventory_df())
        index = build_index(tower)
        for block in tower.blocks:
            handle = unit_grid(block)
            ids = [resolve_token(t, index)[0] for t in handle.tokens]
            assert ids == [u.unit_id for _, u in sorted(
                block.iter_units(), key=lambda fu: endpoint_sort_key(fu[0].floor_code))]

    def test_sample_index_has_no_conflicts(self):
        index = build_index(parse_inventory(generate_inventory_df()))
        assert index.conflicts == []


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
