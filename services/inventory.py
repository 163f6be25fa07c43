"""
Inventory Reconciliation Service

Reconciles the cashier's manual stock counts against the orders recorded
by the register and builds the day-closing record.

Counts are entered in each product's natural unit:
- weighed goods: catty (斤), so sales_qty * price-per-catty is revenue
- fixed-unit goods (boxed options, the combo placeholder): pieces
"""

import logging
from datetime import date

from enums.order_source import OrderSource
from enums.payment_method import PaymentMethod
from exceptions.order import OrderSourceUnavailableException
from models.daily_closing import DailyClosingRecordDTO
from models.inventory import InventoryRecordDTO, InventoryRowDTO
from models.order import OrderDTO
from models.product import CatalogDTO, ProductDTO
from services.unit_pricing import UnitPricingService, round_half_up

logger = logging.getLogger(__name__)


def format_amount(value: float) -> str:
    """Whole amounts without a trailing .0 (40.0 -> "40", 42.5 -> "42.5")."""
    value = round(value, 2)
    return str(int(value)) if value == int(value) else str(value)


class InventoryService:

    @staticmethod
    def select_orders(
        source: OrderSource,
        local_orders: list[OrderDTO],
        remote_orders: list[OrderDTO] | None = None
    ) -> list[OrderDTO]:
        """
        Pick the authoritative order list for a computation.

        The caller names the source explicitly; neither side silently
        overrides the other.

        Raises:
            OrderSourceUnavailableException: REMOTE requested but not fetched
        """
        if source == OrderSource.LOCAL:
            return local_orders
        if remote_orders is None:
            raise OrderSourceUnavailableException(source.value)
        return remote_orders

    @staticmethod
    def is_fixed_unit(product: ProductDTO, catalog: CatalogDTO) -> bool:
        return product.has_fixed_prices or product.id == catalog.combo.placeholder_product_id

    @staticmethod
    def reference_price(product: ProductDTO, catalog: CatalogDTO) -> float:
        if InventoryService.is_fixed_unit(product, catalog):
            if product.has_fixed_prices:
                return product.fixed_prices[0].price
            return catalog.combo.bundle_price
        return product.default_selling_price_per_unit

    @staticmethod
    def build_row(
        product: ProductDTO,
        record: InventoryRecordDTO,
        orders: list[OrderDTO],
        catalog: CatalogDTO
    ) -> InventoryRowDTO:
        """
        Reconcile one product.

        sales_qty          max(0, opening + restock - closing - waste)
        estimated_revenue  round(sales_qty * ref_price)
        actual_revenue     line prices for this product over non-WASTE orders
        diff               actual_revenue - estimated_revenue
        system_sold_unit   weighed: grams over ALL orders (WASTE included, the
                           stock left the shelf) in catty; fixed: quantity
        """
        is_fixed = InventoryService.is_fixed_unit(product, catalog)
        ref_price = InventoryService.reference_price(product, catalog)
        sales_qty = max(0, record.opening + record.restock - record.closing - record.waste)
        estimated_revenue = round_half_up(sales_qty * ref_price)

        actual_revenue = 0
        sold_grams = 0.0
        sold_quantity = 0
        for order in orders:
            for line in order.items:
                if line.product_id != product.id:
                    continue
                if order.payment_method != PaymentMethod.WASTE:
                    actual_revenue += line.price
                sold_grams += line.weight_grams or 0
                sold_quantity += line.quantity

        system_sold_unit = sold_quantity if is_fixed else UnitPricingService.grams_to_catty(sold_grams)

        return InventoryRowDTO(
            product=product,
            record=record,
            is_fixed_unit=is_fixed,
            ref_price=ref_price,
            sales_qty=sales_qty,
            system_sold_unit=system_sold_unit,
            estimated_revenue=estimated_revenue,
            actual_revenue=actual_revenue,
            diff=actual_revenue - estimated_revenue
        )

    @staticmethod
    def build_rows(
        catalog: CatalogDTO,
        inventory: dict[str, InventoryRecordDTO],
        orders: list[OrderDTO]
    ) -> list[InventoryRowDTO]:
        """One row per catalog product; products without a count use zeros."""
        return [
            InventoryService.build_row(product, inventory.get(product.id, InventoryRecordDTO()), orders, catalog)
            for product in catalog.products
        ]

    @staticmethod
    def total_variance(rows: list[InventoryRowDTO]) -> int:
        return sum(row.diff for row in rows)

    @staticmethod
    def total_waste_cost(orders: list[OrderDTO]) -> float:
        return sum(o.total_cost for o in orders if o.payment_method == PaymentMethod.WASTE)

    @staticmethod
    def has_manual_counts(inventory: dict[str, InventoryRecordDTO]) -> bool:
        return any(record.is_counted for record in inventory.values())

    @staticmethod
    def closing_variance(
        rows: list[InventoryRowDTO],
        inventory: dict[str, InventoryRecordDTO],
        orders: list[OrderDTO]
    ) -> float:
        """
        Variance recorded on the closing record.

        Without any manual count the shift still books the declared waste
        as a loss: -total_waste_cost.
        """
        if InventoryService.has_manual_counts(inventory):
            return InventoryService.total_variance(rows)
        return -InventoryService.total_waste_cost(orders)

    @staticmethod
    def revenue_by_method(orders: list[OrderDTO], payment_method: PaymentMethod) -> int:
        return sum(o.total_price for o in orders if o.payment_method == payment_method)

    @staticmethod
    def build_daily_closing(
        orders: list[OrderDTO],
        rows: list[InventoryRowDTO],
        inventory: dict[str, InventoryRecordDTO],
        business_date: date
    ) -> DailyClosingRecordDTO:
        """
        Summarize the day for the closing ledger.

        Revenue counts CASH and LINE_PAY orders; cost counts every order,
        write-offs included.
        """
        cash = InventoryService.revenue_by_method(orders, PaymentMethod.CASH)
        line_pay = InventoryService.revenue_by_method(orders, PaymentMethod.LINE_PAY)
        waste_cost = InventoryService.total_waste_cost(orders)
        total_revenue = cash + line_pay
        total_cost = sum(o.total_cost for o in orders)

        record = DailyClosingRecordDTO(
            date=business_date,
            total_revenue=total_revenue,
            total_cost=round(total_cost, 2),
            total_profit=round(total_revenue - total_cost, 2),
            order_count=len(orders),
            inventory_variance=round(InventoryService.closing_variance(rows, inventory, orders), 2),
            note=f"日結 - 現金:{cash}, LINE:{line_pay}, 系統損耗:{format_amount(waste_cost)}"
        )
        logger.info(
            f"Daily closing {business_date.isoformat()}: revenue={record.total_revenue}, "
            f"profit={record.total_profit}, orders={record.order_count}, variance={record.inventory_variance}"
        )
        return record
