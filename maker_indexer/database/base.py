# maker_indexer/database/base.py

from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import BigInteger, Column, DateTime, Integer, text
from sqlalchemy.orm import declarative_base, declarative_mixin
import msgspec


Base = declarative_base()

# BIGINT primary keys only autoincrement as INTEGER on SQLite
BigIntegerId = BigInteger().with_variant(Integer, "sqlite")


@declarative_mixin
class TimestampMixin:
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text('CURRENT_TIMESTAMP')
    )


class DBBaseModel(Base, TimestampMixin):
    __abstract__ = True

    id = Column(BigIntegerId, primary_key=True, autoincrement=True)

    @classmethod
    def column_values(cls, msgspec_obj: msgspec.Struct, **overrides) -> Dict[str, Any]:
        data = msgspec.structs.asdict(msgspec_obj)
        data.update(overrides)
        valid_columns = {col.name for col in cls.__table__.columns}
        return {k: v for k, v in data.items() if k in valid_columns}

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
