from datetime import datetime

from pydantic import BaseModel, Field

from enums.payment_method import PaymentMethod
from models.cart_line import CartLineDTO


class CustomerDTO(BaseModel):
    name: str = ""
    phone: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.name.strip() and not self.phone.strip()


class OrderDTO(BaseModel):
    """
    Finalized transaction.

    For PaymentMethod.WASTE total_price is forced to 0 while total_cost
    is kept, so total_profit is the negated cost.
    """
    model_config = {"frozen": True}

    id: str
    created_at: datetime
    items: list[CartLineDTO]
    total_price: int
    total_cost: float
    total_profit: float
    payment_method: PaymentMethod
    customer: CustomerDTO | None = None  # Omitted unless name or phone given
    remark: str | None = None


class HeldOrderDTO(BaseModel):
    """A parked cart waiting to be resumed."""
    id: str
    created_at: datetime
    items: list[CartLineDTO] = Field(min_length=1)
    customer: CustomerDTO
    is_paid: bool = False

    @property
    def total_price(self) -> int:
        return sum(item.price for item in self.items)
