"""Role-gated order status transitions.

``ROLE_POLICIES`` is a flat ``role -> rule`` mapping.  Each rule proposes
candidate statuses; ``next_statuses`` then keeps only those the transition
graph allows, so adjacency knowledge lives in ``transitions`` alone.

Anything the mapping does not know (role or status) gets an empty list.
"""

from __future__ import annotations

from typing import Callable

from modules.fulfillment.constants import OrderStatus, Role, as_order_status, as_role
from modules.fulfillment.transitions import can_transition

RoleRule = Callable[[OrderStatus], list[OrderStatus]]


def _supervisor_rule(current: OrderStatus) -> list[OrderStatus]:
    # Supervisors validate or reject.  APROBADO -> PREPARADO is left to the
    # system once picking completes.
    if current == OrderStatus.PENDIENTE:
        return [OrderStatus.APROBADO, OrderStatus.RECHAZADO]
    if current == OrderStatus.APROBADO:
        return [OrderStatus.RECHAZADO, OrderStatus.ANULADO]
    return []


def _warehouse_rule(current: OrderStatus) -> list[OrderStatus]:
    # Warehouse operators move the picking task, never the order.
    return []


def _driver_rule(current: OrderStatus) -> list[OrderStatus]:
    if current in (OrderStatus.PREPARADO, OrderStatus.FACTURADO):
        return [OrderStatus.EN_RUTA]
    if current == OrderStatus.EN_RUTA:
        return [OrderStatus.ENTREGADO]
    return []


def _admin_rule(current: OrderStatus) -> list[OrderStatus]:
    return [status for status in OrderStatus if status != current]


ROLE_POLICIES: dict[str, RoleRule] = {
    Role.SUPERVISOR: _supervisor_rule,
    Role.BODEGUERO: _warehouse_rule,
    Role.TRANSPORTISTA: _driver_rule,
    Role.ADMIN: _admin_rule,
}


def next_statuses(order: object, role: object) -> list[OrderStatus]:
    """Statuses ``role`` may request next for ``order``.

    ``order`` only needs a ``status`` attribute (or key).  The result keeps
    the rule's order and never contains duplicates.
    """
    raw_status = order.get("status") if isinstance(order, dict) else getattr(
        order, "status", None
    )
    current = as_order_status(raw_status)
    actor = as_role(role)
    if current is None or actor is None:
        return []

    rule = ROLE_POLICIES.get(actor)
    if rule is None:
        return []

    allowed: list[OrderStatus] = []
    for candidate in rule(current):
        if candidate not in allowed and can_transition(current, candidate):
            allowed.append(candidate)
    return allowed
