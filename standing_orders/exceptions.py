"""Errors raised while placing standing orders.

Only SelectionError reaches the caller of a placement run; the per-order
errors are handled inside the run so that one order never stops the others.
"""

from __future__ import annotations


class PlacementError(Exception):
    """Base class for standing order placement failures."""

    def __init__(self, message: str, *, order_id: int | None = None):
        super().__init__(message)
        self.order_id = order_id


class SelectionError(PlacementError):
    """The orders of an order cycle could not be selected."""


class CapError(PlacementError):
    """Stock lookup or quantity update failed for an order."""


class CompletionError(PlacementError):
    """Checkout could not complete an order."""


class NotificationError(PlacementError):
    """The placement email for a completed order was not sent."""
