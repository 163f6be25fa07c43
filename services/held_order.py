import logging
from datetime import datetime, timezone
from uuid import uuid4

from exceptions.cart import EmptyCartException
from exceptions.order import HeldOrderNotFoundException
from models.cart_line import CartLineDTO
from models.order import HeldOrderDTO, CustomerDTO

logger = logging.getLogger(__name__)


class HeldOrderService:
    """Parking carts aside and resuming them later. Several may be held at once."""

    @staticmethod
    def _get(held: list[HeldOrderDTO], held_id: str) -> HeldOrderDTO:
        for held_order in held:
            if held_order.id == held_id:
                return held_order
        raise HeldOrderNotFoundException(held_id)

    @staticmethod
    def hold(
        cart: list[CartLineDTO],
        held: list[HeldOrderDTO],
        customer: CustomerDTO | None = None,
        is_paid: bool = False
    ) -> tuple[list[CartLineDTO], list[HeldOrderDTO]]:
        """
        Park the current cart.

        A missing customer is stored as a blank placeholder.

        Returns:
            (empty cart, held orders including the new one)

        Raises:
            EmptyCartException: If the cart has no lines
        """
        if not cart:
            raise EmptyCartException("hold order")

        held_order = HeldOrderDTO(
            id=uuid4().hex,
            created_at=datetime.now(timezone.utc),
            items=[line.model_copy(deep=True) for line in cart],
            customer=customer.model_copy() if customer is not None else CustomerDTO(),
            is_paid=is_paid
        )
        logger.info(f"Held order {held_order.id[:8]} parked ({len(cart)} lines, paid={is_paid})")
        return [], [*held, held_order]

    @staticmethod
    def resume(
        cart: list[CartLineDTO],
        held: list[HeldOrderDTO],
        held_id: str
    ) -> tuple[list[CartLineDTO], list[HeldOrderDTO]]:
        """
        Move a held order's lines into the live cart and drop the held order.

        Lines are appended after anything already in the cart.

        Raises:
            HeldOrderNotFoundException: If held_id is unknown
        """
        held_order = HeldOrderService._get(held, held_id)
        remaining = [h for h in held if h.id != held_id]
        return [*cart, *held_order.items], remaining

    @staticmethod
    def delete(held: list[HeldOrderDTO], held_id: str) -> list[HeldOrderDTO]:
        HeldOrderService._get(held, held_id)
        return [h for h in held if h.id != held_id]

    @staticmethod
    def set_paid(held: list[HeldOrderDTO], held_id: str, is_paid: bool) -> list[HeldOrderDTO]:
        HeldOrderService._get(held, held_id)
        return [h.model_copy(update={"is_paid": is_paid}) if h.id == held_id else h for h in held]
