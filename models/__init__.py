"""
Models Package

This file ensures all SQLAlchemy models are imported and registered,
so Base.metadata knows every table before create_all().
"""

from models.base import Base
from models.session_state import SessionState

__all__ = ['Base', 'SessionState']
