"""Fulfillment DRF serializers for API input.

Serializers only check the request shape.  Leniency towards dirty
values (negative quantities, unknown statuses) is handled by the DTOs and
the status engine, which the Service Layer receives.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.fulfillment.constants import PickingLineStatus

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class PickingLineItemSerializer(serializers.Serializer):
    """Validates a single picking line of a snapshot."""

    requested_quantity = serializers.DecimalField(max_digits=None, decimal_places=None)
    picked_quantity = serializers.DecimalField(
        max_digits=None, decimal_places=None, required=False, default=0
    )
    line_status = serializers.CharField(
        required=False, allow_blank=True, default=PickingLineStatus.PENDIENTE.value
    )


class PickingSnapshotSerializer(serializers.Serializer):
    """Validates the (optional) picking task snapshot."""

    status = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, default=None
    )
    items = PickingLineItemSerializer(many=True, required=False, default=list)


class OrderSnapshotSerializer(serializers.Serializer):
    """Validates the order snapshot (only ``status`` is read)."""

    status = serializers.CharField(allow_blank=True)


class StatusOverviewRequestSerializer(serializers.Serializer):
    """Validates the status overview request payload."""

    order = OrderSnapshotSerializer()
    picking = PickingSnapshotSerializer(required=False, allow_null=True, default=None)


class TransitionCheckSerializer(serializers.Serializer):
    """Validates a transition check request payload."""

    current_status = serializers.CharField()
    target_status = serializers.CharField()
