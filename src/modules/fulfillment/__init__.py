"""Order fulfillment status engine.

Pure helpers, safe to call from any thread:

- ``resolve_display_status``: badge for an order + optional picking task.
- ``picking_progress`` / ``is_picking_complete``: picking completion bar.
- ``can_transition``: order workflow graph.
- ``next_statuses``: statuses an actor role may request next.
"""

from modules.fulfillment.display import resolve_display_status, status_catalog
from modules.fulfillment.policies import next_statuses
from modules.fulfillment.progress import (
    derive_line_status,
    has_pending_lines,
    is_picking_complete,
    picking_progress,
)
from modules.fulfillment.transitions import (
    can_transition,
    can_transition_picking,
    is_terminal,
)

__all__ = [
    "can_transition",
    "can_transition_picking",
    "derive_line_status",
    "has_pending_lines",
    "is_picking_complete",
    "is_terminal",
    "next_statuses",
    "picking_progress",
    "resolve_display_status",
    "status_catalog",
]
