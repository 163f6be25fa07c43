from sqlalchemy import Column, String, Text, DateTime, func

from models.base import Base


class SessionState(Base):
    """
    Key/value rows holding the register's local session.

    Keys: cart, held_orders, sold_out, orders_today.
    Values are JSON documents written after every mutation.
    """
    __tablename__ = 'session_state'

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
