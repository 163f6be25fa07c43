from pydantic import BaseModel


class ItemSalesDTO(BaseModel):
    name: str
    qty: int = 0  # Number of cart lines, not weight
    revenue: int = 0


class SalesSummaryDTO(BaseModel):
    """Statistics for the dashboard overview and the insight prompt."""
    total_revenue: int
    total_cost: float
    total_profit: float
    profit_margin: float  # Percent, 0 when there is no revenue
    order_count: int
    revenue_by_payment: dict[str, int]
    revenue_by_category: dict[str, int]
    waste_cost: float
    item_sales: dict[str, ItemSalesDTO]
    top_items: list[ItemSalesDTO]


class HistorySummaryDTO(BaseModel):
    """Totals over a date range of closing records."""
    days: int
    total_revenue: int
    total_profit: float
    total_cost: float
    order_count: int
    inventory_variance: float
