import pytest

from enums.combo_component import ComboComponent
from enums.payment_method import PaymentMethod


class TestComboComponent:

    def test_from_string(self):
        assert ComboComponent.from_string("meat") == ComboComponent.MEAT
        assert ComboComponent.from_string(" ROE ") == ComboComponent.ROE

    def test_fin_head_alias(self):
        assert ComboComponent.from_string("fin-head") == ComboComponent.FIN_HEAD
        assert ComboComponent.from_string("fin_head") == ComboComponent.FIN_HEAD

    def test_unknown_component(self):
        with pytest.raises(ValueError):
            ComboComponent.from_string("tail")


class TestPaymentMethod:

    def test_only_waste_is_not_revenue(self):
        assert PaymentMethod.CASH.is_revenue
        assert PaymentMethod.LINE_PAY.is_revenue
        assert not PaymentMethod.WASTE.is_revenue
