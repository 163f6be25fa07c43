"""
Cart-related exceptions.
"""

from .base import StallPosException


class CartException(StallPosException):
    """Base exception for cart-related errors."""
    pass


class EmptyCartException(CartException):
    """Raised when an operation needs at least one cart line."""

    def __init__(self, operation: str):
        super().__init__(
            f"Cart is empty, cannot {operation}",
            details={'operation': operation}
        )
        self.operation = operation


class EmptyCartCheckoutException(EmptyCartException):
    """Raised when trying to checkout with empty cart."""

    def __init__(self):
        super().__init__("checkout")


class CartLineNotFoundException(CartException):
    """Raised when cart line not found."""

    def __init__(self, line_id: str):
        super().__init__(
            f"Cart line {line_id} not found",
            details={'line_id': line_id}
        )
        self.line_id = line_id
