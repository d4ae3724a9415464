# maker_indexer/transform/__init__.py

from .errors import (
    TransformerError,
    TransformerNotConfigured,
    FatalRangeQueryError,
    StageError,
    FetchError,
    ConvertError,
    PersistError,
    TransformationFailed,
)
from .interfaces import HeaderSource, LogFetcher, LogConverter, RecordRepository
from .transformer import EventTransformer

__all__ = [
    'TransformerError',
    'TransformerNotConfigured',
    'FatalRangeQueryError',
    'StageError',
    'FetchError',
    'ConvertError',
    'PersistError',
    'TransformationFailed',
    'HeaderSource',
    'LogFetcher',
    'LogConverter',
    'RecordRepository',
    'EventTransformer',
]
