# maker_indexer/database/tables/header.py

from sqlalchemy import BigInteger, Column, LargeBinary, String, UniqueConstraint

from ..base import DBBaseModel
from ...types import Header


class DBHeader(DBBaseModel):
    __tablename__ = 'headers'

    block_number = Column(BigInteger, nullable=False, index=True)
    hash = Column(String(66), nullable=False)
    raw = Column(LargeBinary, nullable=True)

    __table_args__ = (
        UniqueConstraint('block_number', 'hash', name='uq_headers_block_number_hash'),
    )

    def to_header(self) -> Header:
        return Header(id=self.id, block_number=self.block_number, hash=self.hash, raw=self.raw)

    def __repr__(self) -> str:
        return f"<Header(id={self.id}, block_number={self.block_number})>"


class DBCheckedHeader(DBBaseModel):
    __tablename__ = 'checked_headers'

    header_id = Column(BigInteger, nullable=False, index=True)
    event_name = Column(String(64), nullable=False)

    __table_args__ = (
        UniqueConstraint('header_id', 'event_name', name='uq_checked_headers_header_event'),
    )
