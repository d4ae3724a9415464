# maker_indexer/contracts/__init__.py

from .abi_loader import AbiLoader, AbiLoadError, parse_abi

__all__ = ['AbiLoader', 'AbiLoadError', 'parse_abi']
