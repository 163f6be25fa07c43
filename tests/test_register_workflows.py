"""
RegisterSession integration tests

Runs the full register flow against an in-memory SQLite session store
with mocked remote repositories and summarizer, plus one run against a
local aiohttp server returning a non-JSON gateway page.

Run with:
    pytest tests/test_register_workflows.py -v
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from enums.combo_component import ComboComponent
from enums.order_source import OrderSource
from enums.payment_method import PaymentMethod
from exceptions.cart import EmptyCartCheckoutException
from exceptions.combo import InsufficientComboSelectionException
from exceptions.remote import RemoteSyncException
from models.inventory import InventoryRecordDTO
from models.order import CustomerDTO
from repositories.remote_order import RemoteOrderRepository
from repositories.supabase import SupabaseRestClient
from services.catalog import CatalogService
from services.insight import InsightService, UNAVAILABLE_MESSAGE
from services.register import RegisterSession
from services.unit_pricing import UnitPricingService


@pytest.fixture
def order_store():
    store = MagicMock()
    store.insert = AsyncMock()
    store.delete = AsyncMock()
    store.get_by_date = AsyncMock(return_value=[])
    return store


@pytest.fixture
def closing_store():
    store = MagicMock()
    store.upsert = AsyncMock()
    store.query = AsyncMock(return_value=[])
    return store


@pytest.fixture
def insight():
    service = MagicMock()
    service.generate_insight = AsyncMock(return_value="今日表現良好")
    return service


@pytest.fixture
def register(catalog, test_session_maker, order_store, closing_store, insight):
    return RegisterSession(
        catalog,
        session_maker=test_session_maker,
        order_store=order_store,
        closing_store=closing_store,
        insight=insight
    )


async def add_weighed_sale(register, product_id: str, amount: int):
    product = CatalogService.get_product(register.catalog, product_id)
    rule = CatalogService.get_pricing_rule(register.catalog, product)
    return await register.add_quote(product_id, UnitPricingService.quote_by_amount(product, rule, amount))


class TestCheckoutFlow:

    @pytest.mark.asyncio
    async def test_weighed_sale_checkout(self, register, order_store):
        await add_weighed_sale(register, "ss_bellymeat", 120)

        order = await register.checkout(PaymentMethod.CASH)

        assert order.total_price == 120
        assert order.total_cost == pytest.approx(50)
        assert order.total_profit == pytest.approx(70)
        assert register.cart == []
        assert register.orders == [order]
        order_store.insert.assert_awaited_once_with(order)

    @pytest.mark.asyncio
    async def test_empty_checkout_changes_nothing(self, register, order_store):
        with pytest.raises(EmptyCartCheckoutException):
            await register.checkout(PaymentMethod.CASH)
        assert register.orders == []
        order_store.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_remote_insert_failure_keeps_order(self, register, order_store):
        order_store.insert.side_effect = RemoteSyncException("insert order", "timeout")
        await add_weighed_sale(register, "ss_bellymeat", 120)

        order = await register.checkout(PaymentMethod.LINE_PAY, CustomerDTO(name="林太太"))

        assert register.orders == [order]
        assert order.customer.name == "林太太"

    @pytest.mark.asyncio
    async def test_gateway_page_from_remote_store(self, catalog, test_session_maker, closing_store, http_stub):
        url = await http_stub("<html>gateway</html>", content_type="text/html")
        client = SupabaseRestClient(base_url=url, api_key="anon-key", timeout=5)
        register = RegisterSession(
            catalog,
            session_maker=test_session_maker,
            order_store=RemoteOrderRepository(client, table="orders"),
            closing_store=closing_store,
            insight=InsightService(api_key="test-key", api_url=url, timeout=5)
        )
        await add_weighed_sale(register, "ss_bellymeat", 120)

        order = await register.checkout(PaymentMethod.CASH)

        assert register.orders == [order]
        assert register.cart == []
        with pytest.raises(RemoteSyncException):
            await register.fetch_remote_orders(date(2026, 10, 17))
        assert await register.generate_insight() == UNAVAILABLE_MESSAGE

    @pytest.mark.asyncio
    async def test_combo_checkout(self, register):
        await register.add_combo([ComboComponent.MEAT, ComboComponent.ROE, ComboComponent.SKIN])
        order = await register.checkout(PaymentMethod.CASH)
        assert order.total_price == 200
        assert len(order.items) == 3

    @pytest.mark.asyncio
    async def test_incomplete_combo_leaves_cart(self, register):
        await add_weighed_sale(register, "ss_bellymeat", 120)
        with pytest.raises(InsufficientComboSelectionException):
            await register.add_combo([ComboComponent.MEAT])
        assert len(register.cart) == 1

    @pytest.mark.asyncio
    async def test_remark_and_delete(self, register, order_store):
        await add_weighed_sale(register, "ss_bellymeat", 120)
        order = await register.checkout(PaymentMethod.CASH)

        updated = await register.update_remark(order.id, "少醬")
        assert updated.remark == "少醬"

        await register.delete_order(order.id)
        assert register.orders == []
        order_store.delete.assert_awaited_once_with(order.id)

    @pytest.mark.asyncio
    async def test_modifiers_and_line_removal(self, register):
        cart = await add_weighed_sale(register, "ss_bellymeat", 120)
        cart = await register.toggle_modifier(cart[0].id, "加辣")
        assert cart[0].modifiers == ["加辣"]

        await register.remove_line(cart[0].id)
        assert register.cart == []


class TestHeldOrders:

    @pytest.mark.asyncio
    async def test_hold_and_resume(self, register):
        await add_weighed_sale(register, "ss_bellymeat", 120)
        held = await register.hold(CustomerDTO(name="張先生"), is_paid=True)
        assert register.cart == []

        await register.resume(held.id)
        assert register.held_orders == []
        assert [line.price for line in register.cart] == [120]

    @pytest.mark.asyncio
    async def test_delete_held(self, register):
        await add_weighed_sale(register, "ss_bellymeat", 120)
        held = await register.hold()
        await register.delete_held(held.id)
        assert register.held_orders == []


class TestPersistence:

    @pytest.mark.asyncio
    async def test_state_survives_reload(self, catalog, test_session_maker, register):
        await add_weighed_sale(register, "ss_bellymeat", 120)
        await register.checkout(PaymentMethod.CASH)
        await add_weighed_sale(register, "sd_jellyfish", 100)
        await register.hold()
        await add_weighed_sale(register, "sd_peanuts", 60)
        await register.toggle_sold_out("ss_roe")

        reloaded = RegisterSession(catalog, session_maker=test_session_maker, order_store=MagicMock(),
                                   closing_store=MagicMock(), insight=MagicMock())
        await reloaded.load()

        assert reloaded.orders == register.orders
        assert reloaded.cart == register.cart
        assert reloaded.held_orders == register.held_orders
        assert reloaded.sold_out == ["ss_roe"]

    @pytest.mark.asyncio
    async def test_toggle_sold_out_twice(self, register):
        await register.toggle_sold_out("ss_roe")
        assert await register.toggle_sold_out("ss_roe") == []


class TestBackOffice:

    @pytest.mark.asyncio
    async def test_reconcile_local_orders(self, register):
        await add_weighed_sale(register, "sd_jellyfish", 300)
        await register.checkout(PaymentMethod.CASH)

        rows = register.reconcile({"sd_jellyfish": InventoryRecordDTO(opening=3, closing=2)})

        row = next(r for r in rows if r.product.id == "sd_jellyfish")
        assert row.actual_revenue == 300
        assert row.diff == 0

    @pytest.mark.asyncio
    async def test_reconcile_remote_orders(self, register):
        await add_weighed_sale(register, "sd_jellyfish", 300)
        await register.checkout(PaymentMethod.CASH)

        rows = register.reconcile({}, source=OrderSource.REMOTE, remote_orders=[])

        row = next(r for r in rows if r.product.id == "sd_jellyfish")
        assert row.actual_revenue == 0

    @pytest.mark.asyncio
    async def test_close_day_clears_orders(self, register, closing_store):
        await add_weighed_sale(register, "ss_bellymeat", 120)
        await register.checkout(PaymentMethod.CASH)

        result = await register.close_day({}, date(2026, 10, 17))

        assert result.synced is True
        assert result.orders_cleared is True
        assert result.record.total_revenue == 120
        assert register.orders == []
        closing_store.upsert.assert_awaited_once_with(result.record)

    @pytest.mark.asyncio
    async def test_close_day_failure_keeps_orders(self, register, closing_store):
        closing_store.upsert.side_effect = RemoteSyncException("upsert daily closing", "HTTP 500", status=500)
        await add_weighed_sale(register, "ss_bellymeat", 120)
        await register.checkout(PaymentMethod.CASH)

        result = await register.close_day({}, date(2026, 10, 17))

        assert result.synced is False
        assert result.orders_cleared is False
        assert "HTTP 500" in result.error
        assert len(register.orders) == 1

    @pytest.mark.asyncio
    async def test_fetch_history_failure_returns_empty(self, register, closing_store):
        closing_store.query.side_effect = RemoteSyncException("query daily closings", "timeout")
        assert await register.fetch_history(date(2026, 10, 1), date(2026, 10, 17)) == []

    @pytest.mark.asyncio
    async def test_fetch_remote_orders_for_business_day(self, register, order_store):
        await register.fetch_remote_orders(date(2026, 10, 17))
        start, end = order_store.get_by_date.call_args.args
        assert start == "2026-10-17T00:00:00+08:00"
        assert end == "2026-10-18T00:00:00+08:00"

    @pytest.mark.asyncio
    async def test_generate_insight(self, register, insight):
        assert await register.generate_insight() == "今日表現良好"
        insight.generate_insight.assert_awaited_once_with([], register.catalog.products)
