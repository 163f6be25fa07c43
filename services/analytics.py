"""
Analytics Service - sales statistics for the dashboard and the insight prompt

All functions are pure: they read orders/closing records and return
summary DTOs or text, nothing is persisted here.
"""

import json
import logging

from enums.payment_method import PaymentMethod
from models.daily_closing import DailyClosingRecordDTO
from models.order import OrderDTO
from models.product import ProductDTO
from models.sales_summary import SalesSummaryDTO, ItemSalesDTO, HistorySummaryDTO

logger = logging.getLogger(__name__)

TOP_ITEMS_LIMIT = 5


class AnalyticsService:
    """Statistics over today's orders and the closing ledger"""

    @staticmethod
    def build_sales_summary(orders: list[OrderDTO], products: list[ProductDTO]) -> SalesSummaryDTO:
        """
        Aggregate a list of orders.

        Revenue is the sum of order totals (WASTE orders contribute 0),
        cost includes write-offs. Item sales count cart lines per product
        name, so a merged line of three boxes counts once.

        Args:
            orders: Orders to aggregate
            products: Catalog products, used for category lookup

        Returns:
            SalesSummaryDTO
        """
        category_by_id = {p.id: p.category.value for p in products}

        total_revenue = sum(o.total_price for o in orders)
        total_cost = sum(o.total_cost for o in orders)
        total_profit = total_revenue - total_cost
        profit_margin = (total_profit / total_revenue * 100) if total_revenue > 0 else 0.0

        revenue_by_payment = {method.value: 0 for method in PaymentMethod if method.is_revenue}
        revenue_by_category = {category: 0 for category in dict.fromkeys(category_by_id.values())}
        item_sales: dict[str, ItemSalesDTO] = {}
        waste_cost = 0.0

        for order in orders:
            if order.payment_method == PaymentMethod.WASTE:
                waste_cost += order.total_cost
                continue
            revenue_by_payment[order.payment_method.value] += order.total_price
            for line in order.items:
                category = category_by_id.get(line.product_id)
                if category is not None:
                    revenue_by_category[category] += line.price
                sales = item_sales.setdefault(line.product_name, ItemSalesDTO(name=line.product_name))
                sales.qty += 1
                sales.revenue += line.price

        top_items = sorted(item_sales.values(), key=lambda s: s.revenue, reverse=True)[:TOP_ITEMS_LIMIT]

        return SalesSummaryDTO(
            total_revenue=total_revenue,
            total_cost=round(total_cost, 2),
            total_profit=round(total_profit, 2),
            profit_margin=round(profit_margin, 1),
            order_count=len(orders),
            revenue_by_payment=revenue_by_payment,
            revenue_by_category=revenue_by_category,
            waste_cost=round(waste_cost, 2),
            item_sales=item_sales,
            top_items=top_items
        )

    @staticmethod
    def format_summary_text(summary: SalesSummaryDTO, products: list[ProductDTO]) -> str:
        """Plain-text statistics block handed to the summarizer."""
        item_breakdown = {
            name: {"qty": sales.qty, "revenue": sales.revenue}
            for name, sales in summary.item_sales.items()
        }
        product_costs = [{"name": p.name, "cost": p.cost_per_unit} for p in products]
        return (
            f"Total Revenue: ${summary.total_revenue}\n"
            f"Total Profit: ${summary.total_profit}\n"
            f"Profit Margin: {summary.profit_margin:.1f}%\n"
            f"Orders: {summary.order_count}\n"
            f"Waste Cost: ${summary.waste_cost}\n"
            f"Item Sales Breakdown: {json.dumps(item_breakdown, ensure_ascii=False)}\n"
            f"Product Costs (per 600g): {json.dumps(product_costs, ensure_ascii=False)}"
        )

    @staticmethod
    def build_prompt(summary_text: str) -> str:
        return (
            "You are an expert restaurant consultant for a Taiwanese street food stall "
            "selling Smoked Shark and Small Dishes.\n"
            "Analyze the following sales data and cost structure:\n"
            f"{summary_text}\n\n"
            "Please provide a concise, encouraging, and actionable daily report in "
            "Traditional Chinese (Taiwan).\n"
            "Include:\n"
            "1. A brief performance summary (Good/Average/Needs Improvement).\n"
            "2. Which items are the \"Stars\" (high profit/vol) vs \"Dogs\" (low profit/vol).\n"
            "3. One specific recommendation to improve profit margin tomorrow based on the cost data.\n\n"
            "Keep it friendly and under 200 words."
        )

    @staticmethod
    def summarize_history(records: list[DailyClosingRecordDTO]) -> HistorySummaryDTO:
        """Totals over a range of closing records (one per business day)."""
        return HistorySummaryDTO(
            days=len(records),
            total_revenue=sum(r.total_revenue for r in records),
            total_profit=round(sum(r.total_profit for r in records), 2),
            total_cost=round(sum(r.total_cost for r in records), 2),
            order_count=sum(r.order_count for r in records),
            inventory_variance=round(sum(r.inventory_variance for r in records), 2)
        )
