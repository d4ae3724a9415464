# maker_indexer/types/config.py

from typing import Any, Dict, List

import msgspec
from msgspec import Struct

from .evm import hex_to_hash


class InvalidConfigError(ValueError):
    pass


class DatabaseConfig(Struct):
    url: str
    pool_size: int = 5
    max_overflow: int = 10


class RpcConfig(Struct):
    endpoint_url: str
    timeout: int = 30


class TransformerConfig(Struct, frozen=True):
    """Contract, topics and closed block range processed by one transformer run"""
    contract_address: str
    contract_abi: str
    topics: List[str]
    starting_block_number: int
    ending_block_number: int

    def validate(self) -> None:
        if not self.contract_address:
            raise InvalidConfigError("contract_address is required")
        if not self.topics:
            raise InvalidConfigError("at least one topic is required")
        for topic in self.topics:
            try:
                hex_to_hash(topic)
            except ValueError as e:
                raise InvalidConfigError(f"topic {topic!r} is not a hex string") from e
        if self.starting_block_number < 0:
            raise InvalidConfigError(
                f"starting_block_number must be non-negative, got {self.starting_block_number}"
            )
        if self.starting_block_number > self.ending_block_number:
            raise InvalidConfigError(
                f"starting_block_number {self.starting_block_number} is after "
                f"ending_block_number {self.ending_block_number}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TransformerConfig':
        try:
            config = msgspec.convert(data, cls)
        except msgspec.ValidationError as e:
            raise InvalidConfigError(str(e)) from e
        config.validate()
        return config
