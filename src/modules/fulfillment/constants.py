"""Fulfillment domain constants.

Defines the order and picking status choices, the actor roles, and the
two independent state machines (order workflow and warehouse picking task).

``EN_PREPARACION`` is **not** an order status.  It only exists as a display
artifact derived from ``APROBADO`` + an active picking task, so it lives in
its own ``DisplayOnlyStatus`` enum and never appears in the transition maps.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDIENTE = "PENDIENTE", "Pendiente"
    APROBADO = "APROBADO", "Aprobado"
    PREPARADO = "PREPARADO", "Preparado"
    FACTURADO = "FACTURADO", "Facturado"
    EN_RUTA = "EN_RUTA", "En Camino"
    ENTREGADO = "ENTREGADO", "Entregado"
    RECHAZADO = "RECHAZADO", "Rechazado"
    ANULADO = "ANULADO", "Anulado"


class DisplayOnlyStatus(models.TextChoices):
    EN_PREPARACION = "EN_PREPARACION", "En Preparación"


class DisplayStatusKind(models.TextChoices):
    ORDER = "ORDER", "Order status"
    DISPLAY_ONLY = "DISPLAY_ONLY", "Display-only status"
    UNKNOWN = "UNKNOWN", "Unknown status"


class PickingStatus(models.TextChoices):
    PENDIENTE = "PENDIENTE", "Pendiente"
    ASIGNADO = "ASIGNADO", "Asignado"
    EN_PROCESO = "EN_PROCESO", "En Proceso"
    COMPLETADO = "COMPLETADO", "Completado"


class PickingLineStatus(models.TextChoices):
    PENDIENTE = "PENDIENTE", "Pendiente"
    PARCIAL = "PARCIAL", "Parcial"
    COMPLETADO = "COMPLETADO", "Completado"


class Role(models.TextChoices):
    SUPERVISOR = "supervisor", "Supervisor"
    BODEGUERO = "bodeguero", "Bodeguero"
    TRANSPORTISTA = "transportista", "Transportista"
    ADMIN = "admin", "Administrador"


class StatusIcon(models.TextChoices):
    TIME = "time-outline"
    CHECKMARK_CIRCLE = "checkmark-circle-outline"
    CUBE = "cube-outline"
    SYNC = "sync-outline"
    CHECKMARK_DONE_CIRCLE = "checkmark-done-circle-outline"
    CAR = "car-outline"
    CLOSE_CIRCLE = "close-circle-outline"
    BAN = "ban-outline"
    RECEIPT = "receipt-outline"


VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.PENDIENTE: {
        OrderStatus.APROBADO,
        OrderStatus.RECHAZADO,
        OrderStatus.ANULADO,
    },
    # PREPARADO is normally set by the system once picking completes.
    OrderStatus.APROBADO: {
        OrderStatus.RECHAZADO,
        OrderStatus.ANULADO,
        OrderStatus.PREPARADO,
    },
    OrderStatus.PREPARADO: {OrderStatus.EN_RUTA, OrderStatus.ANULADO},
    OrderStatus.FACTURADO: {OrderStatus.EN_RUTA, OrderStatus.ANULADO},
    OrderStatus.EN_RUTA: {OrderStatus.ENTREGADO, OrderStatus.ANULADO},
    OrderStatus.ENTREGADO: set(),
    # Reversal path, not reachable through any non-admin role.
    OrderStatus.RECHAZADO: {OrderStatus.PENDIENTE},
    OrderStatus.ANULADO: set(),
}

TERMINAL_STATES: set[str] = {OrderStatus.ENTREGADO, OrderStatus.ANULADO}

PICKING_TRANSITIONS: dict[str, set[str]] = {
    PickingStatus.PENDIENTE: {PickingStatus.ASIGNADO, PickingStatus.EN_PROCESO},
    PickingStatus.ASIGNADO: {PickingStatus.EN_PROCESO},
    PickingStatus.EN_PROCESO: {PickingStatus.COMPLETADO},
    PickingStatus.COMPLETADO: set(),
}

ROLE_PRECEDENCE: tuple[Role, ...] = (
    Role.ADMIN,
    Role.SUPERVISOR,
    Role.TRANSPORTISTA,
    Role.BODEGUERO,
)


# ---------------------------------------------------------------------------
# Lenient lookups (never raise)
# ---------------------------------------------------------------------------


def _lookup(choices, value: object, normalize):
    if isinstance(value, choices):
        return value
    if not isinstance(value, str):
        return None
    try:
        return choices(normalize(value))
    except ValueError:
        return None


def as_order_status(value: object) -> OrderStatus | None:
    """Return the ``OrderStatus`` for ``value`` or ``None`` if unrecognized."""
    return _lookup(OrderStatus, value, lambda v: v.strip().upper())


def as_picking_status(value: object) -> PickingStatus | None:
    """Return the ``PickingStatus`` for ``value`` or ``None`` if unrecognized."""
    return _lookup(PickingStatus, value, lambda v: v.strip().upper())


def as_role(value: object) -> Role | None:
    """Return the ``Role`` for ``value`` or ``None`` if unrecognized."""
    return _lookup(Role, value, lambda v: v.strip().lower())
