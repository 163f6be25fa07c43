import logging
from datetime import datetime, timezone
from uuid import uuid4

from enums.payment_method import PaymentMethod
from exceptions.cart import EmptyCartCheckoutException
from exceptions.order import OrderNotFoundException
from models.cart_line import CartLineDTO
from models.order import OrderDTO, CustomerDTO

logger = logging.getLogger(__name__)


class OrderService:
    """Checkout: turns a cart into an immutable order, plus order list helpers."""

    @staticmethod
    def finalize(
        cart: list[CartLineDTO],
        payment_method: PaymentMethod,
        customer: CustomerDTO | None = None,
        remark: str | None = None,
        created_at: datetime | None = None
    ) -> OrderDTO:
        """
        Build the finalized order for a cart.

        total_cost is the sum of line costs for every payment method.
        total_price is the sum of line prices, or 0 for WASTE (a write-off
        keeps its cost as a loss). The customer is attached only if a name
        or phone was given. Items are deep copies of the cart lines.

        The caller empties its live cart after a successful finalize.

        Raises:
            EmptyCartCheckoutException: If the cart has no lines
        """
        if not cart:
            raise EmptyCartCheckoutException()

        total_cost = sum(line.cost for line in cart)
        total_price = 0 if payment_method == PaymentMethod.WASTE else sum(line.price for line in cart)

        order = OrderDTO(
            id=uuid4().hex,
            created_at=created_at or datetime.now(timezone.utc),
            items=[line.model_copy(deep=True) for line in cart],
            total_price=total_price,
            total_cost=total_cost,
            total_profit=total_price - total_cost,
            payment_method=payment_method,
            customer=customer.model_copy() if customer is not None and not customer.is_empty else None,
            remark=remark or None
        )
        logger.info(
            f"Order {order.id[:8]} finalized: method={payment_method.value}, "
            f"lines={len(order.items)}, price={order.total_price}, cost={order.total_cost:.2f}"
        )
        return order

    @staticmethod
    def update_remark(order: OrderDTO, text: str) -> OrderDTO:
        return order.model_copy(update={"remark": text})

    # --- Today's order list (newest first) ---

    @staticmethod
    def record(orders: list[OrderDTO], order: OrderDTO) -> list[OrderDTO]:
        return [order, *orders]

    @staticmethod
    def get(orders: list[OrderDTO], order_id: str) -> OrderDTO:
        for order in orders:
            if order.id == order_id:
                return order
        raise OrderNotFoundException(order_id)

    @staticmethod
    def replace(orders: list[OrderDTO], updated: OrderDTO) -> list[OrderDTO]:
        OrderService.get(orders, updated.id)
        return [updated if o.id == updated.id else o for o in orders]

    @staticmethod
    def delete(orders: list[OrderDTO], order_id: str) -> list[OrderDTO]:
        """
        Remove an order. Deletion is terminal and does not touch stock.

        Raises:
            OrderNotFoundException: If order_id is not in the list
        """
        OrderService.get(orders, order_id)
        return [o for o in orders if o.id != order_id]

    # --- Cash drawer ---

    @staticmethod
    def calculate_change(total: int, received: int) -> int:
        """Change owed to the customer; 0 until any cash is entered."""
        return received - total if received > 0 else 0

    @staticmethod
    def is_payment_sufficient(payment_method: PaymentMethod, total: int, received: int) -> bool:
        """Cash must cover the total; wallet and write-offs need no cash."""
        if payment_method != PaymentMethod.CASH:
            return True
        return received > 0 and received >= total
