# maker_indexer/cli/__init__.py

from .commands import cli

__all__ = ['cli']
