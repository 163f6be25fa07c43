from datetime import date, datetime

from pydantic import BaseModel


class DailyClosingRecordDTO(BaseModel):
    """One closed business day, upserted remotely keyed by date."""
    id: int | None = None
    date: date
    total_revenue: int
    total_cost: float
    total_profit: float
    order_count: int
    inventory_variance: float
    note: str | None = None
    created_at: datetime | None = None


class DailyClosingResultDTO(BaseModel):
    """Outcome of a close-day run as seen by the register."""
    record: DailyClosingRecordDTO
    synced: bool
    orders_cleared: bool
    error: str | None = None
