"""Database module"""

from .models import Base, RegistrationRowDB
from .connection import engine, SessionLocal, get_db, init_db
from .row_store import DatabaseRowStore

__all__ = [
    'Base',
    'RegistrationRowDB',
    'engine',
    'SessionLocal',
    'get_db',
    'init_db',
    'DatabaseRowStore',
]
