"""
Combo-related exceptions.
"""

from .base import StallPosException


class ComboException(StallPosException):
    """Base exception for combo errors."""
    pass


class InsufficientComboSelectionException(ComboException):
    """Raised when a combo is confirmed with fewer components than required."""

    def __init__(self, selected_count: int, minimum: int):
        super().__init__(
            f"Combo needs at least {minimum} components, {selected_count} selected",
            details={'selected_count': selected_count, 'minimum': minimum}
        )
        self.selected_count = selected_count
        self.minimum = minimum


class InvalidComboSelectionException(ComboException):
    """Raised when a selection contains duplicates or components without a product."""

    def __init__(self, reason: str):
        super().__init__(
            f"Invalid combo selection: {reason}",
            details={'reason': reason}
        )
        self.reason = reason
