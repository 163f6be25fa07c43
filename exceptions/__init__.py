"""
Custom exceptions for the stall POS core.

This module provides a hierarchy of custom exceptions for consistent error handling
throughout the register.

Exception Hierarchy:
--------------------
StallPosException (base)
├── ProductException
│   ├── InvalidProductException
│   ├── ProductNotFoundException
│   └── BelowMinimumPurchaseException
├── ComboException
│   ├── InsufficientComboSelectionException
│   └── InvalidComboSelectionException
├── CartException
│   ├── EmptyCartException
│   │   └── EmptyCartCheckoutException
│   └── CartLineNotFoundException
├── OrderException
│   ├── OrderNotFoundException
│   ├── HeldOrderNotFoundException
│   └── OrderSourceUnavailableException
├── RemoteSyncException
└── SummarizerUnavailableException

Usage:
------
Services raise specific exceptions:
    raise EmptyCartCheckoutException()

The register session catches and surfaces a cashier-facing message:
    try:
        order = OrderService.finalize(cart, PaymentMethod.CASH)
    except EmptyCartCheckoutException as e:
        message = handle_service_error(e)
"""

from .base import StallPosException
from .cart import CartException, EmptyCartException, EmptyCartCheckoutException, CartLineNotFoundException
from .combo import ComboException, InsufficientComboSelectionException, InvalidComboSelectionException
from .order import (
    OrderException,
    OrderNotFoundException,
    HeldOrderNotFoundException,
    OrderSourceUnavailableException
)
from .product import (
    ProductException,
    InvalidProductException,
    ProductNotFoundException,
    BelowMinimumPurchaseException
)
from .remote import RemoteSyncException, SummarizerUnavailableException

__all__ = [
    # Base
    'StallPosException',

    # Cart
    'CartException',
    'EmptyCartException',
    'EmptyCartCheckoutException',
    'CartLineNotFoundException',

    # Combo
    'ComboException',
    'InsufficientComboSelectionException',
    'InvalidComboSelectionException',

    # Order
    'OrderException',
    'OrderNotFoundException',
    'HeldOrderNotFoundException',
    'OrderSourceUnavailableException',

    # Product
    'ProductException',
    'InvalidProductException',
    'ProductNotFoundException',
    'BelowMinimumPurchaseException',

    # Boundary
    'RemoteSyncException',
    'SummarizerUnavailableException',
]
