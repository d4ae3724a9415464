# maker_indexer/types/primitives.py

from typing import NewType


EvmHash = NewType('EvmHash', str)
