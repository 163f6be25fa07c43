from enum import Enum


class CartLineType(str, Enum):
    """
    How a cart line was priced.

    - STANDARD_BOX: fixed/boxed option picked from the product card
    - CUSTOM_WEIGHT: price or weight typed in by the cashier
    - COMBO_PART: one component of a fixed-price combo
    """

    STANDARD_BOX = "standard_box"
    CUSTOM_WEIGHT = "custom_weight"
    COMBO_PART = "combo_part"
