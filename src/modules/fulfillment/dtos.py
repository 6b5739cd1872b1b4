"""Fulfillment DTOs.

Framework-agnostic, immutable (``frozen=True``) Pydantic v2 models.

Input snapshots are deliberately lenient: they are read from other
services and the engine must keep rendering even when that data is dirty.

- ``PickingLineItemDTO``: one picking line (quantities clamped at 0).
- ``PickingSnapshotDTO``: picking task status + its lines.
- ``OrderSnapshotDTO``: the only order field the engine reads.
- ``DisplayStatusDTO``: the resolved badge descriptor.
- ``OrderStatusOverviewDTO``: descriptor + progress + role action menu.
- ``TransitionDecisionDTO``: outcome of a transition check.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from modules.fulfillment.constants import (
    DisplayStatusKind,
    OrderStatus,
    PickingLineStatus,
    PickingStatus,
    StatusIcon,
    as_order_status,
    as_picking_status,
)

ZERO = Decimal("0")


def coerce_quantity(value: Any) -> Decimal:
    """Best-effort conversion to a non-negative ``Decimal``; junk becomes 0."""
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        quantity = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO
    if not quantity.is_finite() or quantity < 0:
        return ZERO
    return quantity


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class PickingLineItemDTO(BaseModel):
    """Immutable picking line as reported by the warehouse."""

    model_config = ConfigDict(frozen=True)

    requested_quantity: Decimal = ZERO
    picked_quantity: Decimal = ZERO
    line_status: str = PickingLineStatus.PENDIENTE.value

    @field_validator("requested_quantity", "picked_quantity", mode="before")
    @classmethod
    def clamp_quantity(cls, v: Any) -> Decimal:
        return coerce_quantity(v)

    @field_validator("line_status", mode="before")
    @classmethod
    def normalize_line_status(cls, v: Any) -> str:
        if v is None:
            return PickingLineStatus.PENDIENTE.value
        return str(v).strip().upper()


class PickingSnapshotDTO(BaseModel):
    """Immutable picking task snapshot.

    ``status`` is kept raw; an unrecognized value makes the snapshot
    *incomplete* (see ``picking_status``).
    """

    model_config = ConfigDict(frozen=True)

    status: Optional[str] = None
    items: List[PickingLineItemDTO] = []

    @field_validator("status", mode="before")
    @classmethod
    def stringify_status(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return str(v)

    @field_validator("items", mode="before")
    @classmethod
    def drop_malformed_items(cls, v: Any) -> list:
        if not isinstance(v, (list, tuple)):
            return []
        return [item for item in v if isinstance(item, (dict, PickingLineItemDTO))]

    @property
    def picking_status(self) -> PickingStatus | None:
        return as_picking_status(self.status)


def as_picking_snapshot(value: Any) -> Optional[PickingSnapshotDTO]:
    """Coerce ``value`` into a ``PickingSnapshotDTO``.

    Accepts the DTO itself, a mapping, or any object exposing ``status`` /
    ``items`` attributes.  Anything that cannot be read as a snapshot is
    ``None`` ("no picking yet").
    """
    if value is None or isinstance(value, PickingSnapshotDTO):
        return value
    try:
        if isinstance(value, Mapping):
            return PickingSnapshotDTO.model_validate(dict(value))
        if isinstance(value, (str, bytes)):
            return None
        return PickingSnapshotDTO.model_validate(value, from_attributes=True)
    except ValidationError:
        return None


class OrderSnapshotDTO(BaseModel):
    """Immutable order snapshot.  Every other order field is ignored."""

    model_config = ConfigDict(frozen=True)

    status: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def stringify_status(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return str(v)

    @property
    def order_status(self) -> OrderStatus | None:
        return as_order_status(self.status)


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class DisplayStatusDTO(BaseModel):
    """Immutable badge descriptor for an order.

    ``kind`` tags where ``status`` comes from, so a display-only value such
    as ``EN_PREPARACION`` can never be mistaken for a persisted status.
    """

    model_config = ConfigDict(frozen=True)

    status: str
    kind: DisplayStatusKind
    label: str
    description: str
    color: str
    background_color: str
    icon: StatusIcon

    @property
    def order_status(self) -> OrderStatus | None:
        """The persisted ``OrderStatus`` this badge stands for, if any."""
        if self.kind != DisplayStatusKind.ORDER:
            return None
        return as_order_status(self.status)

    @property
    def is_display_only(self) -> bool:
        return self.kind == DisplayStatusKind.DISPLAY_ONLY


class OrderStatusOverviewDTO(BaseModel):
    """Everything a client needs to render one order's fulfillment state."""

    model_config = ConfigDict(frozen=True)

    role: Optional[str]
    display: DisplayStatusDTO
    progress: int
    is_complete: bool
    next_statuses: List[str]


class TransitionDecisionDTO(BaseModel):
    """Immutable outcome of an allowed transition check."""

    model_config = ConfigDict(frozen=True)

    allowed: bool
    role: Optional[str]
    current_status: str
    target_status: str
