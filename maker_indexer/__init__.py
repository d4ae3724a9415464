# maker_indexer/__init__.py

from .core.logging import IndexerLogger, LoggingMixin, log_with_context
from .core.config import IndexerSettings
from .types import Header, TransformerConfig
from .events import event_registry, EventDescriptor, FLIP_KICK, FLIP_KICK_SIGNATURE
from .transform import EventTransformer, TransformationFailed, FatalRangeQueryError
from .factory import create_transformer

__version__ = "0.1.0"

__all__ = [
    'IndexerLogger',
    'LoggingMixin',
    'log_with_context',
    'IndexerSettings',
    'Header',
    'TransformerConfig',
    'event_registry',
    'EventDescriptor',
    'FLIP_KICK',
    'FLIP_KICK_SIGNATURE',
    'EventTransformer',
    'TransformationFailed',
    'FatalRangeQueryError',
    'create_transformer',
]
