"""
Product and pricing-related exceptions.
"""

from .base import StallPosException


class ProductException(StallPosException):
    """Base exception for product-related errors."""
    pass


class InvalidProductException(ProductException):
    """Raised when a product's configuration cannot support the requested conversion."""

    def __init__(self, product_id: str | None, reason: str):
        label = product_id if product_id else "<unknown>"
        super().__init__(
            f"Invalid product {label}: {reason}",
            details={'product_id': product_id, 'reason': reason}
        )
        self.product_id = product_id
        self.reason = reason


class ProductNotFoundException(ProductException):
    """Raised when a product id is not in the catalog."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product {product_id} not found",
            details={'product_id': product_id}
        )
        self.product_id = product_id


class BelowMinimumPurchaseException(ProductException):
    """Raised when a custom price/weight quote is below the category minimum."""

    def __init__(self, product_id: str, price: int, minimum: int):
        super().__init__(
            f"Price {price} for product {product_id} is below the minimum purchase of {minimum}",
            details={'product_id': product_id, 'price': price, 'minimum': minimum}
        )
        self.product_id = product_id
        self.price = price
        self.minimum = minimum
