# maker_indexer/types/evm.py

from typing import Any, List, Mapping

from hexbytes import HexBytes


# Raw log as returned by web3 ``eth_getLogs`` (an AttributeDict of HexBytes fields)
RawLog = Mapping[str, Any]

# One OR-group of topic hashes per topic position
TopicFilter = List[List[HexBytes]]


def hex_to_hash(value: str) -> HexBytes:
    """
    Convert a hex string into a 32 byte hash.

    Shorter values are left-padded with zeros and longer values keep their
    rightmost 32 bytes.
    """
    raw = value[2:] if value[:2].lower() == '0x' else value
    if len(raw) % 2 == 1:
        raw = '0' + raw
    data = bytes.fromhex(raw)
    if len(data) > 32:
        data = data[-32:]
    return HexBytes(data.rjust(32, b'\x00'))


def build_topic_filter(topics: List[str]) -> TopicFilter:
    return [[hex_to_hash(topic) for topic in topics]]
