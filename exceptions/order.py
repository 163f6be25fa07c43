"""
Order-related exceptions.
"""

from .base import StallPosException


class OrderException(StallPosException):
    """Base exception for order-related errors."""
    pass


class OrderNotFoundException(OrderException):
    """Raised when order is not in today's order list."""

    def __init__(self, order_id: str):
        super().__init__(
            f"Order {order_id} not found",
            details={'order_id': order_id}
        )
        self.order_id = order_id


class HeldOrderNotFoundException(OrderException):
    """Raised when a parked cart id is unknown."""

    def __init__(self, held_order_id: str):
        super().__init__(
            f"Held order {held_order_id} not found",
            details={'held_order_id': held_order_id}
        )
        self.held_order_id = held_order_id


class OrderSourceUnavailableException(OrderException):
    """Raised when the requested authoritative order source has no data."""

    def __init__(self, source: str):
        super().__init__(
            f"Order source {source} is not available",
            details={'source': source}
        )
        self.source = source
