# maker_indexer/transform/interfaces.py
"""
Collaborator contracts for the event transformer.

Any object with matching methods can be injected; the SQL, web3 and ABI
implementations live in the database, fetch and decode packages.
"""
from typing import Any, List, Protocol, runtime_checkable

from ..types import Header, RawLog, TopicFilter


@runtime_checkable
class HeaderSource(Protocol):
    def missing_headers(self, starting_block_number: int, ending_block_number: int) -> List[Header]:
        """Headers in the inclusive range that have no record for the event yet."""
        ...

    def mark_header_checked(self, header_id: int) -> None:
        """Record that every log of the header has been transformed."""
        ...


@runtime_checkable
class LogFetcher(Protocol):
    def fetch_logs(self, contract_address: str, topics: TopicFilter, block_number: int) -> List[RawLog]:
        ...


@runtime_checkable
class LogConverter(Protocol):
    def to_entities(self, contract_address: str, contract_abi: str, logs: List[RawLog]) -> List[Any]:
        """One entity per log, in the same order."""
        ...


@runtime_checkable
class RecordRepository(Protocol):
    def create_record(self, header_id: int, model: Any) -> None:
        """Persist one model; repeating the same write must not add a row."""
        ...
