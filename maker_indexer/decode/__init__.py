# maker_indexer/decode/__init__.py

from .log_converter import AbiLogConverter, LogDecodeError

__all__ = ['AbiLogConverter', 'LogDecodeError']
