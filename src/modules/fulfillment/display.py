"""Order status badge resolution.

Joins two independently-owned state machines (the order workflow status and
the warehouse picking status) into a single human-facing descriptor.

The join is an explicit lookup over their cross product:

* ``_ORDER_RULES`` covers every order status whose badge does not depend
  on the picking task.
* ``_APPROVED_RULES`` covers ``APROBADO``, keyed by the picking status
  (``None`` meaning "no picking task yet").

Colors and icons are data, kept in ``STATUS_STYLES`` keyed by the resolved
status (real or display-only).
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from modules.fulfillment.constants import (
    DisplayOnlyStatus,
    DisplayStatusKind,
    OrderStatus,
    PickingStatus,
    StatusIcon,
    as_order_status,
)
from modules.fulfillment.dtos import DisplayStatusDTO, as_picking_snapshot


class StatusStyle(NamedTuple):
    color: str
    background_color: str
    icon: StatusIcon


class _Rule(NamedTuple):
    status: str
    label: str
    description: str
    style_key: str


STATUS_STYLES: dict[str, StatusStyle] = {
    OrderStatus.PENDIENTE: StatusStyle("#F59E0B", "#FEF3C7", StatusIcon.TIME),
    OrderStatus.APROBADO: StatusStyle(
        "#3B82F6", "#DBEAFE", StatusIcon.CHECKMARK_CIRCLE
    ),
    DisplayOnlyStatus.EN_PREPARACION: StatusStyle(
        "#8B5CF6", "#EDE9FE", StatusIcon.SYNC
    ),
    OrderStatus.PREPARADO: StatusStyle("#10B981", "#D1FAE5", StatusIcon.CUBE),
    OrderStatus.FACTURADO: StatusStyle("#06B6D4", "#CFFAFE", StatusIcon.RECEIPT),
    OrderStatus.EN_RUTA: StatusStyle("#6366F1", "#E0E7FF", StatusIcon.CAR),
    OrderStatus.ENTREGADO: StatusStyle(
        "#10B981", "#D1FAE5", StatusIcon.CHECKMARK_DONE_CIRCLE
    ),
    OrderStatus.RECHAZADO: StatusStyle(
        "#EF4444", "#FEE2E2", StatusIcon.CLOSE_CIRCLE
    ),
    OrderStatus.ANULADO: StatusStyle("#6B7280", "#F3F4F6", StatusIcon.BAN),
}

FALLBACK_STYLE = StatusStyle("#6B7280", "#F3F4F6", StatusIcon.TIME)

UNKNOWN_LABEL = "Desconocido"

_ORDER_RULES: dict[str, _Rule] = {
    OrderStatus.PENDIENTE: _Rule(
        OrderStatus.PENDIENTE,
        "Pendiente",
        "Pedido esperando aprobación del supervisor",
        OrderStatus.PENDIENTE,
    ),
    OrderStatus.PREPARADO: _Rule(
        OrderStatus.PREPARADO,
        "Preparado",
        "Pedido preparado, listo para despacho",
        OrderStatus.PREPARADO,
    ),
    OrderStatus.FACTURADO: _Rule(
        OrderStatus.FACTURADO,
        "Facturado",
        "Pedido facturado",
        OrderStatus.FACTURADO,
    ),
    OrderStatus.EN_RUTA: _Rule(
        OrderStatus.EN_RUTA,
        "En Camino",
        "Pedido en ruta hacia el cliente",
        OrderStatus.EN_RUTA,
    ),
    OrderStatus.ENTREGADO: _Rule(
        OrderStatus.ENTREGADO,
        "Entregado",
        "Pedido entregado exitosamente",
        OrderStatus.ENTREGADO,
    ),
    OrderStatus.RECHAZADO: _Rule(
        OrderStatus.RECHAZADO,
        "Rechazado",
        "Pedido rechazado por supervisor",
        OrderStatus.RECHAZADO,
    ),
    OrderStatus.ANULADO: _Rule(
        OrderStatus.ANULADO,
        "Anulado",
        "Pedido anulado",
        OrderStatus.ANULADO,
    ),
}

_APPROVED_RULES: dict[Optional[str], _Rule] = {
    None: _Rule(
        OrderStatus.APROBADO,
        "Aprobado",
        "Pedido aprobado, creando orden de picking...",
        OrderStatus.APROBADO,
    ),
    PickingStatus.PENDIENTE: _Rule(
        OrderStatus.APROBADO,
        "Esperando Bodega",
        "Pedido aprobado, esperando que bodega tome la orden",
        OrderStatus.APROBADO,
    ),
    PickingStatus.ASIGNADO: _Rule(
        DisplayOnlyStatus.EN_PREPARACION,
        "En Preparación",
        "Pedido asignado a bodeguero",
        DisplayOnlyStatus.EN_PREPARACION,
    ),
    PickingStatus.EN_PROCESO: _Rule(
        DisplayOnlyStatus.EN_PREPARACION,
        "En Preparación",
        "Bodeguero está preparando el pedido",
        DisplayOnlyStatus.EN_PREPARACION,
    ),
    # Picking finished but the order record has not caught up yet.
    PickingStatus.COMPLETADO: _Rule(
        DisplayOnlyStatus.EN_PREPARACION,
        "Preparado",
        "Picking completado, sincronizando estado...",
        OrderStatus.PREPARADO,
    ),
}


def _build(rule: _Rule) -> DisplayStatusDTO:
    style = STATUS_STYLES[rule.style_key]
    kind = (
        DisplayStatusKind.DISPLAY_ONLY
        if rule.status == DisplayOnlyStatus.EN_PREPARACION
        else DisplayStatusKind.ORDER
    )
    return DisplayStatusDTO(
        status=str(rule.status),
        kind=kind,
        label=rule.label,
        description=rule.description,
        color=style.color,
        background_color=style.background_color,
        icon=style.icon,
    )


def _fallback(raw_status: object) -> DisplayStatusDTO:
    raw = "" if raw_status is None else str(raw_status)
    label = raw or UNKNOWN_LABEL
    return DisplayStatusDTO(
        status=raw,
        kind=DisplayStatusKind.UNKNOWN,
        label=label,
        description=f"Estado: {label}",
        color=FALLBACK_STYLE.color,
        background_color=FALLBACK_STYLE.background_color,
        icon=FALLBACK_STYLE.icon,
    )


def resolve_display_status(
    order_status: object, picking: object = None
) -> DisplayStatusDTO:
    """Resolve the badge for an order given its (optional) picking task.

    Never raises.  ``picking`` may be a DTO, a mapping or any object with
    ``status``/``items`` attributes.  A picking snapshot that cannot be read
    or whose status is not recognized is treated as "no picking yet".  An
    unrecognized order status produces a neutral descriptor echoing the raw
    value.
    """
    status = as_order_status(order_status)
    if status is None:
        return _fallback(order_status)

    if status == OrderStatus.APROBADO:
        snapshot = as_picking_snapshot(picking)
        picking_status = snapshot.picking_status if snapshot is not None else None
        return _build(_APPROVED_RULES[picking_status])

    return _build(_ORDER_RULES[status])


def status_catalog() -> list[DisplayStatusDTO]:
    """Plain descriptor for every order status plus the display-only one.

    Used as a legend by clients; ``APROBADO`` is shown without picking.
    """
    catalog = [resolve_display_status(status) for status in OrderStatus]
    catalog.append(_build(_APPROVED_RULES[PickingStatus.EN_PROCESO]))
    return catalog
