"""Unit tests for picking progress and completeness."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.fulfillment.constants import PickingLineStatus
from modules.fulfillment.dtos import PickingLineItemDTO, PickingSnapshotDTO
from modules.fulfillment.progress import (
    derive_line_status,
    has_pending_lines,
    is_picking_complete,
    picking_progress,
)

pytestmark = pytest.mark.unit


def snapshot(*lines: tuple) -> PickingSnapshotDTO:
    return PickingSnapshotDTO(
        status="EN_PROCESO",
        items=[
            {"requested_quantity": r, "picked_quantity": p, "line_status": s}
            for r, p, s in lines
        ],
    )


class TestPickingProgress:
    def test_none_is_zero(self):
        assert picking_progress(None) == 0

    def test_no_items_is_zero(self):
        assert picking_progress(PickingSnapshotDTO(status="ASIGNADO")) == 0

    def test_two_lines_rounded(self):
        picking = snapshot((10, 10, "completed"), (5, 0, "pending"))
        assert picking_progress(picking) == 67

    def test_rounds_half_up(self):
        # 1/8 = 12.5%
        picking = snapshot((8, 1, "PARCIAL"))
        assert picking_progress(picking) == 13

    def test_decimal_quantities(self):
        picking = snapshot(("2.50", "1.25", "PARCIAL"))
        assert picking_progress(picking) == 50

    def test_zero_requested_is_zero(self):
        picking = snapshot((0, 3, "COMPLETADO"))
        assert picking_progress(picking) == 0

    def test_over_picking_is_capped(self):
        picking = snapshot((4, 9, "COMPLETADO"))
        assert picking_progress(picking) == 100

    def test_negative_quantities_are_floored(self):
        picking = snapshot((10, -5, "PARCIAL"), (-3, 2, "PARCIAL"))
        assert picking_progress(picking) == 20

    @pytest.mark.parametrize("junk", ["abc", "NaN", "Infinity", None, [1], True])
    def test_malformed_quantities_count_as_zero(self, junk):
        picking = snapshot((10, junk, "PENDIENTE"), (10, 5, "PARCIAL"))
        assert picking_progress(picking) == 25

    @pytest.mark.parametrize(
        "lines",
        [
            [(1, 0, "PENDIENTE")],
            [(1, 1, "COMPLETADO")],
            [(3, 7, "COMPLETADO"), (2, 1, "PARCIAL")],
            [(100, 33, "PARCIAL"), (1, 1, "COMPLETADO")],
            [(-1, -1, "PENDIENTE")],
        ],
    )
    def test_always_within_bounds(self, lines):
        assert 0 <= picking_progress(snapshot(*lines)) <= 100

    @pytest.mark.parametrize(
        "requested, picked, expected",
        [
            ("0.0000000000000001", "1000000000000000", 100),
            ("1", "1E+999999", 100),
            ("1E+999999", "1", 0),
            ("9E+999999", "9E+999999", 100),
            ("12345678901234567890123456789", "1234567890123456789012345678", 10),
        ],
    )
    def test_extreme_quantities_stay_within_bounds(self, requested, picked, expected):
        picking = snapshot((requested, picked, "PARCIAL"))
        assert picking_progress(picking) == expected

    def test_totals_beyond_default_exponent_range(self):
        picking = snapshot(
            ("9E+999999", "9E+999999", "PARCIAL"),
            ("9E+999999", "1", "PARCIAL"),
        )
        assert picking_progress(picking) == 50


class TestPlainMappingSnapshots:
    def test_progress_from_mapping(self):
        picking = {
            "status": "EN_PROCESO",
            "items": [
                {"requested_quantity": 10, "picked_quantity": 10},
                {"requested_quantity": 5, "picked_quantity": 0},
            ],
        }
        assert picking_progress(picking) == 67

    def test_mapping_with_empty_items(self):
        assert picking_progress({"items": []}) == 0
        assert is_picking_complete({"items": []}) is False
        assert has_pending_lines({"items": []}) is False

    def test_completeness_from_mapping(self):
        picking = {"items": [{"requested_quantity": 1, "line_status": "completed"}]}
        assert is_picking_complete(picking) is True
        assert has_pending_lines(picking) is False

    def test_object_with_attributes(self):
        class Picking:
            status = "EN_PROCESO"
            items = [{"requested_quantity": 4, "picked_quantity": 1}]

        assert picking_progress(Picking()) == 25
        assert has_pending_lines(Picking()) is True

    @pytest.mark.parametrize("junk", ["EN_PROCESO", 42, [1, 2], {"items": "x"}])
    def test_unreadable_snapshots_count_as_no_picking(self, junk):
        assert picking_progress(junk) == 0
        assert is_picking_complete(junk) is False


class TestIsPickingComplete:
    def test_none_is_incomplete(self):
        assert is_picking_complete(None) is False

    def test_no_items_is_incomplete(self):
        assert is_picking_complete(PickingSnapshotDTO(status="COMPLETADO")) is False

    def test_all_lines_completed(self):
        picking = snapshot((10, 10, "COMPLETADO"), (5, 5, "COMPLETADO"))
        assert is_picking_complete(picking) is True

    def test_english_marker_is_accepted(self):
        picking = snapshot((10, 10, "completed"))
        assert is_picking_complete(picking) is True

    def test_full_quantity_but_line_not_marked(self):
        picking = snapshot((10, 10, "COMPLETADO"), (5, 5, "PARCIAL"))
        assert picking_progress(picking) == 100
        assert is_picking_complete(picking) is False

    def test_marked_complete_with_missing_quantity(self):
        picking = snapshot((10, 4, "COMPLETADO"))
        assert picking_progress(picking) == 40
        assert is_picking_complete(picking) is True

    def test_scenario_two_lines(self):
        picking = snapshot((10, 10, "completed"), (5, 0, "pending"))
        assert is_picking_complete(picking) is False


class TestHasPendingLines:
    def test_none_has_no_pending_lines(self):
        assert has_pending_lines(None) is False

    def test_untouched_line_is_pending(self):
        picking = snapshot((10, 10, "COMPLETADO"), (5, 0, "PENDIENTE"))
        assert has_pending_lines(picking) is True

    def test_partial_lines_are_not_pending(self):
        picking = snapshot((10, 3, "PARCIAL"), (5, 5, "COMPLETADO"))
        assert has_pending_lines(picking) is False

    def test_missing_line_status_defaults_to_pending(self):
        picking = PickingSnapshotDTO(items=[{"requested_quantity": 1}])
        assert has_pending_lines(picking) is True


class TestDeriveLineStatus:
    def test_nothing_picked(self):
        assert derive_line_status(5, 0) == PickingLineStatus.PENDIENTE

    def test_partially_picked(self):
        assert derive_line_status(5, 2) == PickingLineStatus.PARCIAL

    def test_fully_picked(self):
        assert derive_line_status(Decimal("5.00"), 5) == PickingLineStatus.COMPLETADO

    def test_over_picked(self):
        assert derive_line_status(5, 6) == PickingLineStatus.COMPLETADO

    def test_junk_picked_quantity(self):
        assert derive_line_status(5, "oops") == PickingLineStatus.PENDIENTE


class TestLineItemDTO:
    def test_quantities_are_decimals(self):
        item = PickingLineItemDTO(requested_quantity="3.5", picked_quantity=1)
        assert item.requested_quantity == Decimal("3.5")
        assert item.picked_quantity == Decimal("1")

    def test_line_status_is_normalized(self):
        item = PickingLineItemDTO(requested_quantity=1, line_status=" parcial ")
        assert item.line_status == "PARCIAL"

    def test_malformed_items_are_dropped(self):
        picking = PickingSnapshotDTO(
            status="EN_PROCESO",
            items=[{"requested_quantity": 2, "picked_quantity": 1}, "junk", 7, None],
        )
        assert len(picking.items) == 1

    def test_non_list_items_become_empty(self):
        picking = PickingSnapshotDTO(status="EN_PROCESO", items="not-a-list")
        assert picking.items == []
