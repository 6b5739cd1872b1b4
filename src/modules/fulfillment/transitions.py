"""Transition graphs for the order workflow and the picking task.

Both functions accept raw values and answer ``False`` for anything that is
not a member of the corresponding enum, including the display-only
``EN_PREPARACION``.
"""

from __future__ import annotations

from modules.fulfillment.constants import (
    PICKING_TRANSITIONS,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    as_order_status,
    as_picking_status,
)


def can_transition(current: object, target: object) -> bool:
    """Whether the order workflow allows ``current -> target``."""
    current_status = as_order_status(current)
    target_status = as_order_status(target)
    if current_status is None or target_status is None:
        return False
    return target_status in VALID_TRANSITIONS.get(current_status, set())


def is_terminal(status: object) -> bool:
    order_status = as_order_status(status)
    return order_status is not None and order_status in TERMINAL_STATES


def can_transition_picking(current: object, target: object) -> bool:
    """Whether the picking task allows ``current -> target``."""
    current_status = as_picking_status(current)
    target_status = as_picking_status(target)
    if current_status is None or target_status is None:
        return False
    return target_status in PICKING_TRANSITIONS.get(current_status, set())
