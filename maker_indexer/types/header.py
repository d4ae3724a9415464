# maker_indexer/types/header.py

from typing import Optional

from msgspec import Struct

from .primitives import EvmHash


class Header(Struct, frozen=True):
    id: int
    block_number: int
    hash: EvmHash
    raw: Optional[bytes] = None
