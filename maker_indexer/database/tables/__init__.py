# maker_indexer/database/tables/__init__.py

from .header import DBHeader, DBCheckedHeader
from .flip_kick import DBFlipKick

__all__ = ['DBHeader', 'DBCheckedHeader', 'DBFlipKick']
