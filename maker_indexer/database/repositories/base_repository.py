# maker_indexer/database/repositories/base_repository.py

from typing import Any, Dict, Generic, Sequence, Type, TypeVar

from sqlalchemy.orm import Session
from sqlalchemy.dialects import postgresql, sqlite

from ...core.logging import IndexerLogger
from ..connection import DatabaseManager


T = TypeVar('T')

_DIALECT_INSERTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}


class BaseRepository(Generic[T]):
    def __init__(self, db_manager: DatabaseManager, model_class: Type[T]):
        self.db_manager = db_manager
        self.model_class = model_class
        self.logger = IndexerLogger.get_logger(f'database.repository.{model_class.__name__.lower()}')

    def count(self, session: Session) -> int:
        try:
            return session.query(self.model_class).count()
        except Exception as e:
            self.logger.error(f"Error counting {self.model_class.__name__}: {e}")
            raise
    
    def create(self, session: Session, **kwargs) -> T:
        try:
            instance = self.model_class(**kwargs)
            session.add(instance)
            session.flush()
            
            self.logger.debug(f"Created {self.model_class.__name__} with ID: {getattr(instance, 'id', 'N/A')}")
            return instance
            
        except Exception as e:
            self.logger.error(f"Error creating {self.model_class.__name__}: {e}")
            raise

    def insert_ignoring_conflicts(self, session: Session, values: Dict[str, Any],
                                  conflict_columns: Sequence[str]) -> int:
        """
        INSERT ... ON CONFLICT DO NOTHING on the given unique columns.

        Returns the number of inserted rows, 0 when the row already existed.
        """
        dialect_name = session.get_bind().dialect.name
        insert = _DIALECT_INSERTS.get(dialect_name)
        if insert is None:
            raise NotImplementedError(f"Conflict-ignoring insert is not supported for dialect '{dialect_name}'")

        try:
            stmt = insert(self.model_class.__table__).values(**values).on_conflict_do_nothing(
                index_elements=list(conflict_columns)
            )
            result = session.execute(stmt)
            return result.rowcount
        except Exception as e:
            self.logger.error(f"Error inserting {self.model_class.__name__}: {e}")
            raise
