"""Fulfillment API views.

Exposes the ``FulfillmentStatusService`` via HTTP.  The actor role is
always derived from the authenticated user, never read from the payload.
Domain exceptions are caught and translated into HTTP status codes; the
views never swallow generic exceptions.
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.fulfillment.dtos import OrderSnapshotDTO, PickingSnapshotDTO
from modules.fulfillment.exceptions import (
    InvalidStatusTransition,
    TransitionNotPermitted,
)
from modules.fulfillment.roles import resolve_user_role
from modules.fulfillment.serializers import (
    StatusOverviewRequestSerializer,
    TransitionCheckSerializer,
)
from modules.fulfillment.services import FulfillmentStatusService


class StatusOverviewView(APIView):
    """POST /api/v1/fulfillment/overview/

    Returns the badge, picking progress and the action menu of the
    requesting user for the given order/picking snapshots.
    """

    throttle_scope = "fulfillment"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = FulfillmentStatusService()

    @extend_schema(request=StatusOverviewRequestSerializer)
    def post(self, request: Request) -> Response:
        serializer = StatusOverviewRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        order = OrderSnapshotDTO.model_validate(dict(data["order"]))
        picking = (
            PickingSnapshotDTO.model_validate(dict(data["picking"]))
            if data.get("picking") is not None
            else None
        )

        overview = self._service.get_overview(
            order=order,
            picking=picking,
            role=resolve_user_role(request.user),
        )
        return Response(overview.model_dump(mode="json"))


class TransitionCheckView(APIView):
    """POST /api/v1/fulfillment/transitions/check/

    ``200`` when the requesting user may move the order, ``400`` when the
    workflow forbids the edge, ``403`` when only the role forbids it.
    """

    throttle_scope = "fulfillment"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = FulfillmentStatusService()

    @extend_schema(request=TransitionCheckSerializer)
    def post(self, request: Request) -> Response:
        serializer = TransitionCheckSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            decision = self._service.check_transition(
                current_status=data["current_status"],
                target_status=data["target_status"],
                role=resolve_user_role(request.user),
            )
        except InvalidStatusTransition as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except TransitionNotPermitted as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_403_FORBIDDEN,
            )

        return Response(decision.model_dump(mode="json"))


class StatusCatalogView(APIView):
    """GET /api/v1/fulfillment/statuses/

    Status legend (label, colors, icon) and both transition graphs.
    """

    throttle_scope = "fulfillment"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = FulfillmentStatusService()

    def get(self, request: Request) -> Response:
        return Response(self._service.get_catalog())
