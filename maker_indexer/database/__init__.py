# maker_indexer/database/__init__.py

from .base import Base, DBBaseModel
from .connection import DatabaseManager

__all__ = ['Base', 'DBBaseModel', 'DatabaseManager']
