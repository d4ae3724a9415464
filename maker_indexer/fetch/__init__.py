# maker_indexer/fetch/__init__.py

from .log_fetcher import Web3LogFetcher, build_web3

__all__ = ['Web3LogFetcher', 'build_web3']
