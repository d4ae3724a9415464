# maker_indexer/factory.py
"""
Wires an EventTransformer to the SQL header store and repository, the web3
log fetcher and the ABI converter for a registered event.
"""
from typing import Optional

from web3 import Web3

from .core.logging import IndexerLogger, log_with_context, INFO
from .database.connection import DatabaseManager
from .database.repositories import SqlEventRepository, SqlHeaderSource
from .decode.log_converter import AbiLogConverter
from .events import event_registry
from .fetch.log_fetcher import Web3LogFetcher
from .transform.transformer import EventTransformer
from .types import TransformerConfig


def create_transformer(event_key: str,
                       db_manager: DatabaseManager,
                       w3: Web3,
                       config: Optional[TransformerConfig] = None) -> EventTransformer:
    logger = IndexerLogger.get_logger('factory')
    descriptor = event_registry.get(event_key)

    transformer = EventTransformer(
        descriptor=descriptor,
        header_source=SqlHeaderSource(db_manager, descriptor.key),
        fetcher=Web3LogFetcher(w3),
        converter=AbiLogConverter(descriptor),
        repository=SqlEventRepository(db_manager, descriptor),
        config=config,
    )

    log_with_context(logger, INFO, "Transformer created",
                    event_name=descriptor.name,
                    configured=config is not None)
    return transformer
