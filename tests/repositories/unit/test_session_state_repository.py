"""
SessionStateRepository Unit Tests

Uses in-memory SQLite (aiosqlite) from conftest.
"""

import pytest

from enums.cart_line_type import CartLineType
from enums.payment_method import PaymentMethod
from models.cart_line import CartLineDTO
from repositories.session_state import (
    SessionStateRepository,
    CART_KEY, ORDERS_KEY, SOLD_OUT_KEY,
    CART_ADAPTER, ORDERS_ADAPTER, SOLD_OUT_ADAPTER,
)
from services.order import OrderService


def make_line() -> CartLineDTO:
    return CartLineDTO(
        id="line-1",
        product_id="ss_bellymeat",
        product_name="鯊魚腹肉",
        type=CartLineType.CUSTOM_WEIGHT,
        weight_grams=200,
        price=120,
        cost=50,
        modifiers=["加辣"]
    )


class TestSessionStateRepository:

    @pytest.mark.asyncio
    async def test_missing_key_returns_none(self, test_session):
        assert await SessionStateRepository.get(CART_KEY, CART_ADAPTER, test_session) is None

    @pytest.mark.asyncio
    async def test_put_then_get(self, test_session):
        await SessionStateRepository.put(CART_KEY, CART_ADAPTER, [make_line()], test_session)
        await test_session.commit()

        cart = await SessionStateRepository.get(CART_KEY, CART_ADAPTER, test_session)
        assert cart == [make_line()]

    @pytest.mark.asyncio
    async def test_put_replaces_value(self, test_session):
        await SessionStateRepository.put(SOLD_OUT_KEY, SOLD_OUT_ADAPTER, ["ss_roe"], test_session)
        await test_session.commit()
        await SessionStateRepository.put(SOLD_OUT_KEY, SOLD_OUT_ADAPTER, [], test_session)
        await test_session.commit()

        assert await SessionStateRepository.get(SOLD_OUT_KEY, SOLD_OUT_ADAPTER, test_session) == []

    @pytest.mark.asyncio
    async def test_orders_keep_payment_method_and_timestamps(self, test_session):
        order = OrderService.finalize([make_line()], PaymentMethod.LINE_PAY, remark="外送")
        await SessionStateRepository.put(ORDERS_KEY, ORDERS_ADAPTER, [order], test_session)
        await test_session.commit()

        [loaded] = await SessionStateRepository.get(ORDERS_KEY, ORDERS_ADAPTER, test_session)
        assert loaded.id == order.id
        assert loaded.payment_method == PaymentMethod.LINE_PAY
        assert loaded.created_at == order.created_at
        assert loaded.remark == "外送"

    @pytest.mark.asyncio
    async def test_delete(self, test_session):
        await SessionStateRepository.put(SOLD_OUT_KEY, SOLD_OUT_ADAPTER, ["ss_roe"], test_session)
        await test_session.commit()
        await SessionStateRepository.delete(SOLD_OUT_KEY, test_session)
        await test_session.commit()

        assert await SessionStateRepository.get(SOLD_OUT_KEY, SOLD_OUT_ADAPTER, test_session) is None
