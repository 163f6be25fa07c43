from typing import Any

from pydantic import TypeAdapter
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute
from models.cart_line import CartLineDTO
from models.order import OrderDTO, HeldOrderDTO
from models.session_state import SessionState

CART_KEY = "cart"
ORDERS_KEY = "orders_today"
HELD_ORDERS_KEY = "held_orders"
SOLD_OUT_KEY = "sold_out"

CART_ADAPTER = TypeAdapter(list[CartLineDTO])
ORDERS_ADAPTER = TypeAdapter(list[OrderDTO])
HELD_ORDERS_ADAPTER = TypeAdapter(list[HeldOrderDTO])
SOLD_OUT_ADAPTER = TypeAdapter(list[str])


class SessionStateRepository:
    """Repository for the register's key/value session rows"""

    @staticmethod
    async def get(key: str, adapter: TypeAdapter, session: AsyncSession) -> Any | None:
        """
        Load and validate one value.

        Returns:
            The decoded value, or None if the key was never written
        """
        stmt = select(SessionState).where(SessionState.key == key)
        result = await session_execute(stmt, session)
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return adapter.validate_json(row.value)

    @staticmethod
    async def put(key: str, adapter: TypeAdapter, value: Any, session: AsyncSession) -> None:
        """Insert or replace one value. The caller commits."""
        await session.merge(SessionState(key=key, value=adapter.dump_json(value).decode()))

    @staticmethod
    async def delete(key: str, session: AsyncSession) -> None:
        row = await session.get(SessionState, key)
        if row is not None:
            await session.delete(row)
