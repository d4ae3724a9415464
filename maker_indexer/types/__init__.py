# maker_indexer/types/__init__.py

from .primitives import EvmHash

from .evm import (
    RawLog,
    TopicFilter,
    hex_to_hash,
    build_topic_filter,
)

from .header import Header

from .config import (
    TransformerConfig,
    DatabaseConfig,
    RpcConfig,
    InvalidConfigError,
)

__all__ = [
    'EvmHash',
    'RawLog',
    'TopicFilter',
    'hex_to_hash',
    'build_topic_filter',
    'Header',
    'TransformerConfig',
    'DatabaseConfig',
    'RpcConfig',
    'InvalidConfigError',
]
