"""
UnitPricingService Unit Tests

Tests currency <-> weight conversion, catty/tael input and the quotes
produced by the weight/price dialog.

Run with:
    pytest tests/pricing/unit/test_unit_pricing_service.py -v
"""

import pytest

from enums.cart_line_type import CartLineType
from exceptions.product import InvalidProductException, BelowMinimumPurchaseException
from services.unit_pricing import UnitPricingService, round_half_up


class TestRoundHalfUp:

    def test_half_rounds_up(self):
        assert round_half_up(120.5) == 121
        assert round_half_up(0.5) == 1

    def test_below_half_rounds_down(self):
        assert round_half_up(120.49) == 120


class TestWeightConversion:

    def test_weight_for_amount(self):
        assert UnitPricingService.weight_for_amount(120, 360) == pytest.approx(200.0)

    def test_amount_for_weight_rounds_to_whole_unit(self):
        # 250 g at 360/600 g = 150.0
        assert UnitPricingService.amount_for_weight(250, 360) == 150
        # 199 g at 360/600 g = 119.4
        assert UnitPricingService.amount_for_weight(199, 360) == 119

    @pytest.mark.parametrize("amount", [1, 50, 100, 120, 137, 999])
    @pytest.mark.parametrize("price", [300, 360, 550, 650, 700])
    def test_round_trip_is_stable(self, amount, price):
        weight = UnitPricingService.weight_for_amount(amount, price)
        committed = UnitPricingService.amount_for_weight(weight, price)
        assert UnitPricingService.weight_for_amount(committed, price) == pytest.approx(weight)

    @pytest.mark.parametrize("price", [0, -10])
    def test_non_positive_price_rejected(self, price):
        with pytest.raises(InvalidProductException):
            UnitPricingService.weight_for_amount(100, price)
        with pytest.raises(InvalidProductException):
            UnitPricingService.amount_for_weight(100, price)

    def test_non_positive_unit_weight_rejected(self):
        with pytest.raises(InvalidProductException):
            UnitPricingService.weight_for_amount(100, 360, unit_weight_grams=0)

    def test_proportional_cost(self):
        assert UnitPricingService.proportional_cost(150, 200) == pytest.approx(50.0)

    def test_proportional_cost_without_weight_is_zero(self):
        assert UnitPricingService.proportional_cost(150, None) == 0.0
        assert UnitPricingService.proportional_cost(150, 0) == 0.0


class TestCattyTael:

    def test_total_catty(self):
        assert UnitPricingService.total_catty(1, 8) == 1.5

    @pytest.mark.parametrize("catty,tael", [(0, 0), (0, 4), (2, 0), (3, 15)])
    def test_total_catty_formula(self, catty, tael):
        assert UnitPricingService.total_catty(catty, tael) == pytest.approx(catty + tael / 16)

    def test_catty_to_grams(self):
        assert UnitPricingService.catty_to_grams(1, 8) == pytest.approx(900.0)

    def test_grams_to_catty(self):
        assert UnitPricingService.grams_to_catty(900) == 1.5


class TestQuotes:

    def test_standard_uses_first_fixed_option(self, dried_fish, dish_rule):
        quote = UnitPricingService.quote_standard(dried_fish, dish_rule)
        assert quote.price == 130
        assert quote.line_type == CartLineType.STANDARD_BOX
        # 130 / 650 * 600
        assert quote.weight_grams == 120

    def test_standard_uses_chosen_fixed_option(self, dried_fish, dish_rule):
        quote = UnitPricingService.quote_standard(dried_fish, dish_rule, fixed_price=180)
        assert quote.price == 180

    def test_standard_falls_back_to_category_box_price(self, belly_meat, shark_rule):
        quote = UnitPricingService.quote_standard(belly_meat, shark_rule)
        assert quote.price == 100
        # 100 / 360 * 600 = 166.67
        assert quote.weight_grams == 167

    def test_quote_by_amount(self, belly_meat, shark_rule):
        quote = UnitPricingService.quote_by_amount(belly_meat, shark_rule, 120)
        assert quote.price == 120
        assert quote.weight_grams == 200
        assert quote.line_type == CartLineType.CUSTOM_WEIGHT

    def test_quote_by_weight(self, belly_meat, shark_rule):
        quote = UnitPricingService.quote_by_weight(belly_meat, shark_rule, 300)
        assert quote.price == 180
        assert quote.weight_grams == 300

    def test_quote_below_category_minimum_rejected(self, belly_meat, shark_rule):
        with pytest.raises(BelowMinimumPurchaseException) as exc_info:
            UnitPricingService.quote_by_amount(belly_meat, shark_rule, 80)
        assert exc_info.value.minimum == 100

    def test_quote_zero_amount_rejected(self, belly_meat, dish_rule):
        with pytest.raises(BelowMinimumPurchaseException):
            UnitPricingService.quote_by_amount(belly_meat, dish_rule, 0)

    def test_custom_quote_on_unweighable_product_rejected(self, catalog, shark_rule):
        placeholder = next(p for p in catalog.products if p.id == "ss_combo_200")
        with pytest.raises(InvalidProductException):
            UnitPricingService.quote_by_amount(placeholder, shark_rule, 200)
