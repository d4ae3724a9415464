# maker_indexer/database/tables/flip_kick.py

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint

from ..base import DBBaseModel


class DBFlipKick(DBBaseModel):
    __tablename__ = 'flip_kick'

    header_id = Column(BigInteger, ForeignKey('headers.id', ondelete='CASCADE'), nullable=False, index=True)
    bid_id = Column(String(78), nullable=False)
    lot = Column(String(78), nullable=False)
    bid = Column(String(78), nullable=False)
    gal = Column(String(42), nullable=False)
    end = Column(DateTime(timezone=True), nullable=False)
    urn = Column(String(66), nullable=False)
    tab = Column(String(78), nullable=False)
    tx_idx = Column(Integer, nullable=False)
    log_idx = Column(Integer, nullable=False)
    raw_log = Column(Text, nullable=False)

    __table_args__ = (
        UniqueConstraint('header_id', 'log_idx', name='uq_flip_kick_header_log'),
    )

    def __repr__(self) -> str:
        return f"<FlipKick(header_id={self.header_id}, bid_id={self.bid_id})>"
