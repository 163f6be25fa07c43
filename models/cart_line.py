from pydantic import BaseModel, Field

from enums.cart_line_type import CartLineType


class CartLineDTO(BaseModel):
    """
    One priced line pending checkout.

    price and cost are cumulative over quantity merged units.
    cost is kept fractional and only rounded for display.
    """
    id: str
    product_id: str
    product_name: str  # Copied at creation, survives catalog renames
    type: CartLineType
    quantity: int = Field(default=1, ge=1)
    weight_grams: float | None = None  # None for pure fixed-price sales
    price: int = Field(ge=0)
    cost: float = 0.0
    combo_id: str | None = None  # Shared by the lines of one combo
    modifiers: list[str] = []

    @property
    def unit_price(self) -> float:
        return self.price / self.quantity


class PriceQuoteDTO(BaseModel):
    """Result of the weight/price dialog, ready to become a cart line."""
    price: int
    weight_grams: int
    line_type: CartLineType
