"""
Register Session - state owner for one cash register

Holds the live cart, today's orders, held orders and the sold-out set.
Every mutation runs the pure services first, swaps in the new state only
when they succeed, then persists all four values to the local session
table. Remote calls (order mirror, closing ledger) come last and are
best-effort: a RemoteSyncException is logged and never unwinds state.
"""

import logging
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import async_sessionmaker

import config
from db import get_db_session, session_commit
from enums.combo_component import ComboComponent
from enums.order_source import OrderSource
from enums.payment_method import PaymentMethod
from exceptions.remote import RemoteSyncException
from models.cart_line import CartLineDTO, PriceQuoteDTO
from models.daily_closing import DailyClosingRecordDTO, DailyClosingResultDTO
from models.inventory import InventoryRecordDTO, InventoryRowDTO
from models.order import OrderDTO, HeldOrderDTO, CustomerDTO
from models.product import CatalogDTO
from repositories.daily_closing import DailyClosingRepository
from repositories.remote_order import RemoteOrderRepository
from repositories.session_state import (
    SessionStateRepository,
    CART_KEY, ORDERS_KEY, HELD_ORDERS_KEY, SOLD_OUT_KEY,
    CART_ADAPTER, ORDERS_ADAPTER, HELD_ORDERS_ADAPTER, SOLD_OUT_ADAPTER,
)
from services.cart import CartService
from services.catalog import CatalogService
from services.combo import ComboService
from services.held_order import HeldOrderService
from services.insight import InsightService
from services.inventory import InventoryService
from services.order import OrderService

logger = logging.getLogger(__name__)


def business_today() -> date:
    return datetime.now(ZoneInfo(config.TIMEZONE)).date()


class RegisterSession:

    def __init__(
        self,
        catalog: CatalogDTO,
        session_maker: async_sessionmaker | None = None,
        order_store: RemoteOrderRepository | None = None,
        closing_store: DailyClosingRepository | None = None,
        insight: InsightService | None = None
    ):
        self.catalog = catalog
        self.session_maker = session_maker
        if order_store is None and config.remote_store_configured():
            order_store = RemoteOrderRepository()
        self.order_store = order_store
        self.closing_store = closing_store or DailyClosingRepository()
        self.insight = insight or InsightService()

        self.cart: list[CartLineDTO] = []
        self.orders: list[OrderDTO] = []
        self.held_orders: list[HeldOrderDTO] = []
        self.sold_out: list[str] = []

    # --- Persistence ---

    async def load(self) -> None:
        """Restore state written by a previous run; missing keys stay empty."""
        async with get_db_session(self.session_maker) as session:
            self.cart = await SessionStateRepository.get(CART_KEY, CART_ADAPTER, session) or []
            self.orders = await SessionStateRepository.get(ORDERS_KEY, ORDERS_ADAPTER, session) or []
            self.held_orders = await SessionStateRepository.get(HELD_ORDERS_KEY, HELD_ORDERS_ADAPTER, session) or []
            self.sold_out = await SessionStateRepository.get(SOLD_OUT_KEY, SOLD_OUT_ADAPTER, session) or []
        logger.info(
            f"Session loaded: {len(self.cart)} cart lines, {len(self.orders)} orders, "
            f"{len(self.held_orders)} held"
        )

    async def save(self) -> None:
        async with get_db_session(self.session_maker) as session:
            await SessionStateRepository.put(CART_KEY, CART_ADAPTER, self.cart, session)
            await SessionStateRepository.put(ORDERS_KEY, ORDERS_ADAPTER, self.orders, session)
            await SessionStateRepository.put(HELD_ORDERS_KEY, HELD_ORDERS_ADAPTER, self.held_orders, session)
            await SessionStateRepository.put(SOLD_OUT_KEY, SOLD_OUT_ADAPTER, self.sold_out, session)
            await session_commit(session)

    # --- Cart ---

    async def add_quote(self, product_id: str, quote: PriceQuoteDTO) -> list[CartLineDTO]:
        product = CatalogService.get_product(self.catalog, product_id)
        self.cart = CartService.add_quote(self.cart, product, quote)
        await self.save()
        return self.cart

    async def add_combo(self, selected: list[ComboComponent]) -> list[CartLineDTO]:
        lines = ComboService.confirm(selected, self.catalog)
        self.cart = CartService.add_lines(self.cart, lines)
        await self.save()
        return self.cart

    async def toggle_modifier(self, line_id: str, modifier: str) -> list[CartLineDTO]:
        self.cart = CartService.toggle_modifier(self.cart, line_id, modifier)
        await self.save()
        return self.cart

    async def remove_line(self, line_id: str) -> list[CartLineDTO]:
        self.cart = CartService.remove_line(self.cart, line_id)
        await self.save()
        return self.cart

    async def clear_cart(self) -> None:
        self.cart = []
        await self.save()

    # --- Orders ---

    async def checkout(
        self,
        payment_method: PaymentMethod,
        customer: CustomerDTO | None = None,
        remark: str | None = None
    ) -> OrderDTO:
        """
        Finalize the cart, record the order locally, then mirror it remotely.

        Raises:
            EmptyCartCheckoutException: If the cart is empty (nothing changes)
        """
        order = OrderService.finalize(self.cart, payment_method, customer, remark)
        self.orders = OrderService.record(self.orders, order)
        self.cart = []
        await self.save()

        if self.order_store is not None:
            try:
                await self.order_store.insert(order)
            except RemoteSyncException as e:
                logger.warning(f"Order {order.id[:8]} kept locally, remote insert failed: {e}")
        return order

    async def update_remark(self, order_id: str, text: str) -> OrderDTO:
        updated = OrderService.update_remark(OrderService.get(self.orders, order_id), text)
        self.orders = OrderService.replace(self.orders, updated)
        await self.save()
        return updated

    async def delete_order(self, order_id: str) -> None:
        self.orders = OrderService.delete(self.orders, order_id)
        await self.save()

        if self.order_store is not None:
            try:
                await self.order_store.delete(order_id)
            except RemoteSyncException as e:
                logger.warning(f"Order {order_id[:8]} deleted locally, remote delete failed: {e}")

    # --- Held orders ---

    async def hold(self, customer: CustomerDTO | None = None, is_paid: bool = False) -> HeldOrderDTO:
        self.cart, self.held_orders = HeldOrderService.hold(self.cart, self.held_orders, customer, is_paid)
        await self.save()
        return self.held_orders[-1]

    async def resume(self, held_id: str) -> list[CartLineDTO]:
        self.cart, self.held_orders = HeldOrderService.resume(self.cart, self.held_orders, held_id)
        await self.save()
        return self.cart

    async def delete_held(self, held_id: str) -> None:
        self.held_orders = HeldOrderService.delete(self.held_orders, held_id)
        await self.save()

    async def set_held_paid(self, held_id: str, is_paid: bool) -> None:
        self.held_orders = HeldOrderService.set_paid(self.held_orders, held_id, is_paid)
        await self.save()

    # --- Catalog state ---

    async def toggle_sold_out(self, product_id: str) -> list[str]:
        CatalogService.get_product(self.catalog, product_id)
        self.sold_out = CatalogService.toggle_sold_out(self.sold_out, product_id)
        await self.save()
        return self.sold_out

    # --- Back office ---

    async def fetch_remote_orders(self, business_date: date | None = None) -> list[OrderDTO]:
        """
        Orders mirrored remotely for one business day.

        Raises:
            RemoteSyncException: If the remote store is unavailable
        """
        if self.order_store is None:
            raise RemoteSyncException("fetch orders", "remote store not configured")
        day = business_date or business_today()
        tz = ZoneInfo(config.TIMEZONE)
        start = datetime.combine(day, datetime.min.time(), tzinfo=tz)
        end = start + timedelta(days=1)
        return await self.order_store.get_by_date(start.isoformat(), end.isoformat())

    def reconcile(
        self,
        inventory: dict[str, InventoryRecordDTO],
        source: OrderSource = OrderSource.LOCAL,
        remote_orders: list[OrderDTO] | None = None
    ) -> list[InventoryRowDTO]:
        orders = InventoryService.select_orders(source, self.orders, remote_orders)
        return InventoryService.build_rows(self.catalog, inventory, orders)

    async def close_day(
        self,
        inventory: dict[str, InventoryRecordDTO] | None = None,
        business_date: date | None = None
    ) -> DailyClosingResultDTO:
        """
        Close the business day.

        The closing record is upserted by date. Today's orders are cleared
        only after the remote write succeeds; on failure they stay in the
        session and the error is reported in the result.
        """
        inventory = inventory or {}
        rows = InventoryService.build_rows(self.catalog, inventory, self.orders)
        record = InventoryService.build_daily_closing(
            self.orders, rows, inventory, business_date or business_today()
        )

        try:
            await self.closing_store.upsert(record)
        except RemoteSyncException as e:
            logger.error(f"Daily closing for {record.date.isoformat()} not synced, orders kept: {e}")
            return DailyClosingResultDTO(record=record, synced=False, orders_cleared=False, error=str(e))

        self.orders = []
        await self.save()
        return DailyClosingResultDTO(record=record, synced=True, orders_cleared=True)

    async def fetch_history(self, start: date, end: date) -> list[DailyClosingRecordDTO]:
        try:
            return await self.closing_store.query(start, end)
        except RemoteSyncException as e:
            logger.warning(f"History fetch failed: {e}")
            return []

    async def generate_insight(self) -> str:
        return await self.insight.generate_insight(self.orders, self.catalog.products)
