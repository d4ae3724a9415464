# maker_indexer/database/repositories/header_repository.py

from typing import List, Optional

from sqlalchemy import select

from ...core.logging import log_with_context, DEBUG, ERROR
from ...types import Header, EvmHash
from ..connection import DatabaseManager
from ..tables.header import DBHeader, DBCheckedHeader
from .base_repository import BaseRepository


class HeaderRepository(BaseRepository[DBHeader]):
    """Read and write access to ingested block headers"""

    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager, DBHeader)

    def create_header(self, block_number: int, hash: EvmHash, raw: Optional[bytes] = None) -> Header:
        with self.db_manager.get_transaction() as session:
            record = self.create(session, block_number=block_number, hash=hash, raw=raw)
            return record.to_header()


class SqlHeaderSource(BaseRepository[DBCheckedHeader]):
    """
    Header source for one event type.

    A header is missing until it has been marked as checked for the event,
    which happens once every record derived from it has been written.
    """

    def __init__(self, db_manager: DatabaseManager, event_key: str):
        super().__init__(db_manager, DBCheckedHeader)
        self.event_key = event_key

    def missing_headers(self, starting_block_number: int, ending_block_number: int) -> List[Header]:
        checked = select(DBCheckedHeader.header_id).where(
            DBCheckedHeader.event_name == self.event_key
        )

        try:
            with self.db_manager.get_session() as session:
                records = session.query(DBHeader).filter(
                    DBHeader.block_number >= starting_block_number,
                    DBHeader.block_number <= ending_block_number,
                    DBHeader.id.not_in(checked),
                ).order_by(DBHeader.block_number, DBHeader.id).all()
                headers = [record.to_header() for record in records]
        except Exception as e:
            log_with_context(self.logger, ERROR, "Error querying missing headers",
                            event_name=self.event_key,
                            starting_block_number=starting_block_number,
                            ending_block_number=ending_block_number,
                            error=str(e))
            raise

        log_with_context(self.logger, DEBUG, "Missing headers found",
                        event_name=self.event_key,
                        header_count=len(headers))
        return headers

    def mark_header_checked(self, header_id: int) -> None:
        with self.db_manager.get_transaction() as session:
            self.insert_ignoring_conflicts(
                session,
                {'header_id': header_id, 'event_name': self.event_key},
                conflict_columns=('header_id', 'event_name'),
            )
