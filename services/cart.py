import logging
from uuid import uuid4

from enums.cart_line_type import CartLineType
from exceptions.cart import CartLineNotFoundException
from models.cart_line import CartLineDTO, PriceQuoteDTO
from models.product import ProductDTO
from services.unit_pricing import UnitPricingService, round_half_up

logger = logging.getLogger(__name__)


class CartService:
    """
    Pure cart operations.

    Every method takes the current cart (list of lines) and returns a new
    list; the input list and its lines are never modified.
    """

    @staticmethod
    def _find_index(cart: list[CartLineDTO], line_id: str) -> int:
        for index, line in enumerate(cart):
            if line.id == line_id:
                return index
        raise CartLineNotFoundException(line_id)

    @staticmethod
    def add_or_merge(
        cart: list[CartLineDTO],
        product: ProductDTO,
        price: float,
        weight_grams: float | None,
        line_type: CartLineType,
        cost: float | None = None
    ) -> list[CartLineDTO]:
        """
        Add one unit to the cart, merging with an identical line.

        A line is identical when product id, line type and per-unit price
        (line.price / line.quantity) all match exactly. Merging increments
        quantity and accumulates weight, price and cost. Same product at a
        different unit price stays a separate line.

        Args:
            cart: Current cart lines
            product: Catalog product being sold
            price: Committed price of this unit (rounded to a whole unit)
            weight_grams: Weight of this unit, None for non-weighed sales
            line_type: How the unit was priced
            cost: Explicit cost; defaults to the proportional cost of the weight

        Returns:
            New cart list
        """
        price = round_half_up(price)
        if cost is None:
            cost = UnitPricingService.proportional_cost(product.cost_per_unit, weight_grams)

        for index, line in enumerate(cart):
            if line.product_id == product.id and line.type == line_type and line.unit_price == price:
                if line.weight_grams is None and weight_grams is None:
                    weight = None
                else:
                    weight = (line.weight_grams or 0) + (weight_grams or 0)
                merged = line.model_copy(update={
                    "quantity": line.quantity + 1,
                    "weight_grams": weight,
                    "price": line.price + price,
                    "cost": line.cost + cost,
                })
                logger.debug(f"Merged {product.id} into line {line.id[:8]} (qty={merged.quantity})")
                return [*cart[:index], merged, *cart[index + 1:]]

        new_line = CartLineDTO(
            id=uuid4().hex,
            product_id=product.id,
            product_name=product.name,
            type=line_type,
            quantity=1,
            weight_grams=weight_grams,
            price=price,
            cost=cost,
            modifiers=[]
        )
        return [*cart, new_line]

    @staticmethod
    def add_quote(cart: list[CartLineDTO], product: ProductDTO, quote: PriceQuoteDTO) -> list[CartLineDTO]:
        return CartService.add_or_merge(cart, product, quote.price, quote.weight_grams, quote.line_type)

    @staticmethod
    def add_lines(cart: list[CartLineDTO], lines: list[CartLineDTO]) -> list[CartLineDTO]:
        """Append pre-built lines (combo parts) without merging."""
        return [*cart, *lines]

    @staticmethod
    def toggle_modifier(cart: list[CartLineDTO], line_id: str, modifier: str) -> list[CartLineDTO]:
        """
        Add the modifier tag to a line, or remove it if already present.

        Price and cost are untouched.

        Raises:
            CartLineNotFoundException: If line_id is not in the cart
        """
        index = CartService._find_index(cart, line_id)
        line = cart[index]
        if modifier in line.modifiers:
            modifiers = [m for m in line.modifiers if m != modifier]
        else:
            modifiers = [*line.modifiers, modifier]
        return [*cart[:index], line.model_copy(update={"modifiers": modifiers}), *cart[index + 1:]]

    @staticmethod
    def remove_line(cart: list[CartLineDTO], line_id: str) -> list[CartLineDTO]:
        """
        Raises:
            CartLineNotFoundException: If line_id is not in the cart
        """
        index = CartService._find_index(cart, line_id)
        return [*cart[:index], *cart[index + 1:]]

    @staticmethod
    def cart_total(cart: list[CartLineDTO]) -> int:
        return sum(line.price for line in cart)

    @staticmethod
    def cart_cost(cart: list[CartLineDTO]) -> float:
        return sum(line.cost for line in cart)
