"""Fulfillment status service layer (Use Cases).

Composes the pure status engine (badge resolution, picking progress,
transition graph and role policy) into the read models the clients use,
and guards status change requests before they are sent to the order
workflow service.

Business rules enforced:
- Unknown order statuses render a neutral badge instead of failing.
- Unknown roles get no actions (fail closed).
- A transition must be allowed by the workflow graph **and** by the
  actor's role policy.
"""

from __future__ import annotations

from typing import Any, Dict

import structlog

from modules.fulfillment.constants import (
    PICKING_TRANSITIONS,
    VALID_TRANSITIONS,
    DisplayStatusKind,
    as_order_status,
    as_role,
)
from modules.fulfillment.display import resolve_display_status, status_catalog
from modules.fulfillment.dtos import (
    OrderSnapshotDTO,
    OrderStatusOverviewDTO,
    TransitionDecisionDTO,
    as_picking_snapshot,
)
from modules.fulfillment.exceptions import (
    InvalidStatusTransition,
    TransitionNotPermitted,
)
from modules.fulfillment.policies import next_statuses
from modules.fulfillment.progress import is_picking_complete, picking_progress
from modules.fulfillment.transitions import can_transition

logger = structlog.get_logger(__name__)


def _graph_as_dict(graph: dict[str, set[str]]) -> Dict[str, list[str]]:
    return {
        str(source): sorted(str(target) for target in targets)
        for source, targets in graph.items()
    }


class FulfillmentStatusService:
    """Application service for the order fulfillment status engine.

    Stateless: one instance can serve any number of concurrent requests.
    """

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_overview(
        self,
        order: OrderSnapshotDTO,
        picking: Any,
        role: Any,
    ) -> OrderStatusOverviewDTO:
        """Badge, picking progress and role action menu for one order."""
        actor = as_role(role)
        picking = as_picking_snapshot(picking)
        log = logger.bind(
            order_status=order.status,
            picking_status=picking.status if picking is not None else None,
            role=str(actor) if actor else None,
        )

        display = resolve_display_status(order.status, picking)
        if display.kind == DisplayStatusKind.UNKNOWN:
            log.warning("fulfillment.unknown_order_status")
        if picking is not None and picking.picking_status is None:
            log.warning("fulfillment.incomplete_picking_snapshot")
        if actor is None:
            log.info("fulfillment.role_unresolved")

        overview = OrderStatusOverviewDTO(
            role=str(actor) if actor else None,
            display=display,
            progress=picking_progress(picking),
            is_complete=is_picking_complete(picking),
            next_statuses=[str(status) for status in next_statuses(order, actor)],
        )
        log.info(
            "fulfillment.overview_resolved",
            display_status=display.status,
            progress=overview.progress,
            actions=len(overview.next_statuses),
        )
        return overview

    def get_catalog(self) -> Dict[str, Any]:
        """Status legend plus both transition graphs."""
        return {
            "statuses": [
                descriptor.model_dump(mode="json") for descriptor in status_catalog()
            ],
            "order_transitions": _graph_as_dict(VALID_TRANSITIONS),
            "picking_transitions": _graph_as_dict(PICKING_TRANSITIONS),
        }

    # ------------------------------------------------------------------
    # Commands (guards)
    # ------------------------------------------------------------------

    def check_transition(
        self,
        current_status: Any,
        target_status: Any,
        role: Any,
    ) -> TransitionDecisionDTO:
        """Validate that ``role`` may move an order ``current -> target``.

        Raises:
            InvalidStatusTransition: the workflow graph forbids the edge.
            TransitionNotPermitted: the edge exists but the role may not use it.
        """
        actor = as_role(role)
        log = logger.bind(
            current_status=str(current_status),
            target_status=str(target_status),
            role=str(actor) if actor else None,
        )

        if not can_transition(current_status, target_status):
            log.warning("fulfillment.invalid_transition")
            raise InvalidStatusTransition(
                f"Cannot transition from {current_status} to {target_status}."
            )

        allowed = next_statuses({"status": current_status}, actor)
        target = as_order_status(target_status)
        if target not in allowed:
            log.warning("fulfillment.transition_denied")
            raise TransitionNotPermitted(
                f"Role {actor or 'unknown'} cannot transition "
                f"from {current_status} to {target_status}."
            )

        log.info("fulfillment.transition_allowed")
        return TransitionDecisionDTO(
            allowed=True,
            role=str(actor),
            current_status=str(as_order_status(current_status)),
            target_status=str(target),
        )
