import logging
from datetime import date

from pydantic import ValidationError

import config
from exceptions.remote import RemoteSyncException
from models.daily_closing import DailyClosingRecordDTO
from repositories.supabase import SupabaseRestClient

logger = logging.getLogger(__name__)


class DailyClosingRepository:
    """Remote ledger of closed business days, one row per date."""

    def __init__(self, client: SupabaseRestClient | None = None, table: str | None = None):
        self.client = client or SupabaseRestClient()
        self.table = table or config.SUPABASE_CLOSINGS_TABLE

    async def upsert(self, record: DailyClosingRecordDTO) -> None:
        """
        Insert or replace the record for record.date.

        Closing the same day twice overwrites the earlier row.
        """
        payload = record.model_dump(mode="json", exclude={"id", "created_at"})
        await self.client.request(
            "upsert daily closing", "POST", self.table,
            params=[("on_conflict", "date")],
            payload=payload,
            prefer="resolution=merge-duplicates,return=minimal"
        )
        logger.info(f"Daily closing for {record.date.isoformat()} upserted")

    async def query(self, start: date, end: date) -> list[DailyClosingRecordDTO]:
        """Records with start <= date <= end, newest first."""
        rows = await self.client.request(
            "query daily closings", "GET", self.table,
            params=[
                ("select", "*"),
                ("date", f"gte.{start.isoformat()}"),
                ("date", f"lte.{end.isoformat()}"),
                ("order", "date.desc"),
            ]
        )
        try:
            return [DailyClosingRecordDTO.model_validate(row) for row in rows]
        except ValidationError as e:
            raise RemoteSyncException("query daily closings", f"malformed closing row: {e.error_count()} errors") from e
