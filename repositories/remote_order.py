import logging

from pydantic import ValidationError

import config
from exceptions.remote import RemoteSyncException
from models.order import OrderDTO
from repositories.supabase import SupabaseRestClient

logger = logging.getLogger(__name__)


class RemoteOrderRepository:
    """Mirror of finalized orders in the remote store."""

    def __init__(self, client: SupabaseRestClient | None = None, table: str | None = None):
        self.client = client or SupabaseRestClient()
        self.table = table or config.SUPABASE_ORDERS_TABLE

    async def insert(self, order: OrderDTO) -> None:
        await self.client.request(
            "insert order", "POST", self.table,
            payload=order.model_dump(mode="json"),
            prefer="return=minimal"
        )
        logger.info(f"Order {order.id[:8]} mirrored to remote store")

    async def delete(self, order_id: str) -> None:
        await self.client.request(
            "delete order", "DELETE", self.table,
            params=[("id", f"eq.{order_id}")]
        )
        logger.info(f"Order {order_id[:8]} deleted from remote store")

    async def get_by_date(self, start_iso: str, end_iso: str) -> list[OrderDTO]:
        """
        Orders created in [start_iso, end_iso), oldest first.

        Raises:
            RemoteSyncException: On request failure or a row that is not an order
        """
        rows = await self.client.request(
            "fetch orders", "GET", self.table,
            params=[
                ("select", "*"),
                ("created_at", f"gte.{start_iso}"),
                ("created_at", f"lt.{end_iso}"),
                ("order", "created_at.asc"),
            ]
        )
        try:
            return [OrderDTO.model_validate(row) for row in rows]
        except ValidationError as e:
            raise RemoteSyncException("fetch orders", f"malformed order row: {e.error_count()} errors") from e
