# maker_indexer/database/repositories/__init__.py

from .base_repository import BaseRepository
from .header_repository import HeaderRepository, SqlHeaderSource
from .event_repository import SqlEventRepository

__all__ = ['BaseRepository', 'HeaderRepository', 'SqlHeaderSource', 'SqlEventRepository']
