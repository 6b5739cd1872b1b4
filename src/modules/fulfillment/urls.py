"""Fulfillment URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.fulfillment.views import (
    StatusCatalogView,
    StatusOverviewView,
    TransitionCheckView,
)

urlpatterns = [
    path(
        "fulfillment/overview/",
        StatusOverviewView.as_view(),
        name="fulfillment_overview",
    ),
    path(
        "fulfillment/transitions/check/",
        TransitionCheckView.as_view(),
        name="fulfillment_transition_check",
    ),
    path(
        "fulfillment/statuses/",
        StatusCatalogView.as_view(),
        name="fulfillment_statuses",
    ),
]
