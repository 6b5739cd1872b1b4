"""Fulfillment domain exceptions.

Raised by the Service Layer when a status change request is refused.
The pure resolution helpers never raise; the API layer (Views) catches
these and translates them into HTTP responses.
"""

from __future__ import annotations


class InvalidStatusTransition(Exception):
    """The order workflow does not allow the requested transition."""


class TransitionNotPermitted(Exception):
    """The workflow allows the transition, but not for the actor's role."""
