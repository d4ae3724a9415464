# maker_indexer/database/repositories/event_repository.py

from typing import List

from msgspec import Struct

from ...core.logging import log_with_context, DEBUG
from ...events.base import EventDescriptor
from ..connection import DatabaseManager
from .base_repository import BaseRepository


class SqlEventRepository(BaseRepository):
    """
    Writes event models to the descriptor's table.

    Records are unique per (header_id, log_idx); writing the same occurrence
    twice leaves a single row.
    """

    CONFLICT_COLUMNS = ('header_id', 'log_idx')

    def __init__(self, db_manager: DatabaseManager, descriptor: EventDescriptor):
        if descriptor.table is None:
            raise ValueError(f"Event '{descriptor.key}' has no table to persist to")
        super().__init__(db_manager, descriptor.table)
        self.descriptor = descriptor

    def create_record(self, header_id: int, model: Struct) -> None:
        if not isinstance(model, self.descriptor.model_type):
            raise TypeError(
                f"{self.descriptor.name} records take {self.descriptor.model_type.__name__}, "
                f"got {type(model).__name__}"
            )

        values = self.model_class.column_values(model, header_id=header_id)

        with self.db_manager.get_transaction() as session:
            inserted = self.insert_ignoring_conflicts(session, values, self.CONFLICT_COLUMNS)

        log_with_context(self.logger, DEBUG,
                        "Record created" if inserted else "Record already exists, skipped",
                        event_name=self.descriptor.name,
                        header_id=header_id)

    def get_by_header_id(self, header_id: int) -> List:
        with self.db_manager.get_session() as session:
            return session.query(self.model_class).filter(
                self.model_class.header_id == header_id
            ).order_by(self.model_class.log_idx).all()

    def count_records(self) -> int:
        with self.db_manager.get_session() as session:
            return self.count(session)
