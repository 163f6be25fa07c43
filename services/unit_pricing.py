from decimal import Decimal, ROUND_HALF_UP

from enums.cart_line_type import CartLineType
from exceptions.product import InvalidProductException, BelowMinimumPurchaseException
from models.cart_line import PriceQuoteDTO
from models.product import ProductDTO, CategoryPricingRuleDTO

# 1 catty (斤) = 600 g = 16 tael (兩)
STANDARD_UNIT_GRAMS = 600
TAELS_PER_CATTY = 16


def round_half_up(value: float) -> int:
    """Round half away from zero to a whole unit (120.5 -> 121)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class UnitPricingService:
    """Conversions between currency and weight for goods sold per catty."""

    @staticmethod
    def _require_positive(value: float, what: str, product_id: str | None) -> None:
        if value is None or value <= 0:
            raise InvalidProductException(product_id, f"{what} must be positive (got {value})")

    @staticmethod
    def weight_for_amount(
        amount: float,
        price_per_unit_weight: float,
        unit_weight_grams: float = STANDARD_UNIT_GRAMS,
        product_id: str | None = None
    ) -> float:
        """
        Grams a customer gets for a given amount of money.

        grams = amount / price_per_unit_weight * unit_weight_grams

        No rounding here; callers round to the precision they display.

        Example:
            >>> UnitPricingService.weight_for_amount(120, 360)
            200.0

        Raises:
            InvalidProductException: If price or unit weight is not positive
        """
        UnitPricingService._require_positive(price_per_unit_weight, "price per unit weight", product_id)
        UnitPricingService._require_positive(unit_weight_grams, "unit weight", product_id)
        return amount / price_per_unit_weight * unit_weight_grams

    @staticmethod
    def amount_for_weight(
        grams: float,
        price_per_unit_weight: float,
        unit_weight_grams: float = STANDARD_UNIT_GRAMS,
        product_id: str | None = None
    ) -> int:
        """
        Committed price for a weight, rounded half-up to a whole currency unit.

        Raises:
            InvalidProductException: If price or unit weight is not positive
        """
        UnitPricingService._require_positive(price_per_unit_weight, "price per unit weight", product_id)
        UnitPricingService._require_positive(unit_weight_grams, "unit weight", product_id)
        return round_half_up(grams / unit_weight_grams * price_per_unit_weight)

    @staticmethod
    def proportional_cost(
        cost_per_unit_weight: float,
        weight_grams: float | None,
        unit_weight_grams: float = STANDARD_UNIT_GRAMS
    ) -> float:
        """
        Cost of a weight at a per-unit cost. Fractional, never rounded here.

        A missing weight costs 0.
        """
        UnitPricingService._require_positive(unit_weight_grams, "unit weight", None)
        if not weight_grams:
            return 0.0
        return cost_per_unit_weight / unit_weight_grams * weight_grams

    @staticmethod
    def total_catty(catty: float, tael: float = 0) -> float:
        """
        Combine catty and tael input into catties.

        Example:
            >>> UnitPricingService.total_catty(1, 8)
            1.5
        """
        return catty + tael / TAELS_PER_CATTY

    @staticmethod
    def catty_to_grams(catty: float, tael: float = 0) -> float:
        return UnitPricingService.total_catty(catty, tael) * STANDARD_UNIT_GRAMS

    @staticmethod
    def grams_to_catty(grams: float, ndigits: int = 2) -> float:
        return round(grams / STANDARD_UNIT_GRAMS, ndigits)

    # --- Quotes for the weight/price dialog ---

    @staticmethod
    def _grams_for_price(product: ProductDTO, price: float) -> int:
        return round_half_up(UnitPricingService.weight_for_amount(
            price, product.default_selling_price_per_unit, product_id=product.id
        ))

    @staticmethod
    def quote_standard(
        product: ProductDTO,
        rule: CategoryPricingRuleDTO,
        fixed_price: int | None = None
    ) -> PriceQuoteDTO:
        """
        Quote a boxed sale.

        Price is the chosen fixed option, else the product's first fixed
        option, else the category's standard box price. Weight is the
        equivalent at the product's selling price, or 0 for products that
        are not sold by weight (e.g. the combo placeholder).
        """
        if fixed_price:
            price = fixed_price
        elif product.has_fixed_prices:
            price = product.fixed_prices[0].price
        else:
            price = rule.standard_box_price

        weight = UnitPricingService._grams_for_price(product, price) if product.is_weighable else 0
        return PriceQuoteDTO(price=price, weight_grams=weight, line_type=CartLineType.STANDARD_BOX)

    @staticmethod
    def quote_by_amount(product: ProductDTO, rule: CategoryPricingRuleDTO, amount: float) -> PriceQuoteDTO:
        """
        Quote a custom sale from the amount the customer asks for.

        Raises:
            InvalidProductException: If the product has no selling price per unit
            BelowMinimumPurchaseException: If the amount is under the category minimum
        """
        price = round_half_up(amount) if amount and amount > 0 else 0
        UnitPricingService._check_minimum(product, rule, price)
        weight = UnitPricingService._grams_for_price(product, amount)
        return PriceQuoteDTO(price=price, weight_grams=weight, line_type=CartLineType.CUSTOM_WEIGHT)

    @staticmethod
    def quote_by_weight(product: ProductDTO, rule: CategoryPricingRuleDTO, grams: float) -> PriceQuoteDTO:
        """
        Quote a custom sale from a weighed amount in grams.

        Raises:
            InvalidProductException: If the product has no selling price per unit
            BelowMinimumPurchaseException: If the resulting price is under the category minimum
        """
        if grams and grams > 0:
            price = UnitPricingService.amount_for_weight(
                grams, product.default_selling_price_per_unit, product_id=product.id
            )
        else:
            price = 0
        UnitPricingService._check_minimum(product, rule, price)
        return PriceQuoteDTO(price=price, weight_grams=round_half_up(grams), line_type=CartLineType.CUSTOM_WEIGHT)

    @staticmethod
    def _check_minimum(product: ProductDTO, rule: CategoryPricingRuleDTO, price: int) -> None:
        if not product.is_weighable:
            raise InvalidProductException(product.id, "product is not sold by weight")
        if price <= 0 or price < rule.min_custom_price:
            raise BelowMinimumPurchaseException(product.id, price, rule.min_custom_price)
