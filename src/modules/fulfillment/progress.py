"""Picking progress helpers.

``picking_progress`` and ``is_picking_complete`` are intentionally
independent: a line can reach its requested quantity and still be flagged
incomplete by the warehouse, so completeness is read from the line status
markers only, never from the percentage.

Dirty upstream quantities (negative, NaN, garbage) are tolerated by clamping
rather than reported: these helpers sit on a rendering path.
"""

from __future__ import annotations

from decimal import MAX_EMAX, MIN_EMIN, ROUND_HALF_UP, Decimal, Overflow, localcontext
from typing import Any

from modules.fulfillment.constants import PickingLineStatus
from modules.fulfillment.dtos import ZERO, as_picking_snapshot, coerce_quantity

# English marker accepted from older mobile builds.
COMPLETED_LINE_MARKERS: frozenset[str] = frozenset(
    {PickingLineStatus.COMPLETADO.value, "COMPLETED"}
)


def _is_line_completed(line_status: str) -> bool:
    return line_status.strip().upper() in COMPLETED_LINE_MARKERS


def picking_progress(picking: Any) -> int:
    """Percentage (0-100) of requested units already picked."""
    picking = as_picking_snapshot(picking)
    if picking is None or not picking.items:
        return 0

    # Widest exponent range so totals of huge lines stay finite; past it
    # they saturate to Infinity instead of raising.
    with localcontext() as ctx:
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        ctx.traps[Overflow] = False
        requested = sum((item.requested_quantity for item in picking.items), ZERO)
        picked = sum((item.picked_quantity for item in picking.items), ZERO)
        if requested <= 0:
            return 0
        if picked >= requested:
            return 100
        percent = (picked / requested * 100).quantize(
            Decimal("1"), rounding=ROUND_HALF_UP
        )
    return max(0, min(100, int(percent)))


def is_picking_complete(picking: Any) -> bool:
    """``True`` only if there is at least one line and every line is completed."""
    picking = as_picking_snapshot(picking)
    if picking is None or not picking.items:
        return False
    return all(_is_line_completed(item.line_status) for item in picking.items)


def has_pending_lines(picking: Any) -> bool:
    """Whether any line has not been touched yet (blocks closing the task)."""
    picking = as_picking_snapshot(picking)
    if picking is None:
        return False
    return any(
        item.line_status.strip().upper() == PickingLineStatus.PENDIENTE
        for item in picking.items
    )


def derive_line_status(requested: object, picked: object) -> PickingLineStatus:
    """Line status the warehouse assigns after registering a pick."""
    requested_qty = coerce_quantity(requested)
    picked_qty = coerce_quantity(picked)
    if picked_qty <= 0:
        return PickingLineStatus.PENDIENTE
    if picked_qty >= requested_qty:
        return PickingLineStatus.COMPLETADO
    return PickingLineStatus.PARCIAL
