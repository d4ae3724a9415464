# maker_indexer/events/flip_kick.py
"""
FlipKick: the flipper auction ``Kick`` event.

Emitted when a collateral auction starts. ``id`` is the bid id, ``lot`` the
collateral up for auction, ``bid`` the opening bid, ``gal`` the recipient of
auction income, ``end`` the auction expiry (unix time), ``urn`` the CDP the
collateral came from and ``tab`` the debt to cover.
"""

from datetime import datetime, timezone
from typing import Any

from msgspec import Struct
from web3 import Web3

from ..database.tables.flip_kick import DBFlipKick
from ..types import RawLog
from .base import EventDescriptor, event_registry


FLIP_KICK_TEXT_SIGNATURE = "Kick(uint256,uint256,uint256,address,uint48,bytes32,uint256)"

FLIP_KICK_EVENT_ABI = {
    "anonymous": False,
    "type": "event",
    "name": "Kick",
    "inputs": [
        {"indexed": True, "name": "id", "type": "uint256"},
        {"indexed": False, "name": "lot", "type": "uint256"},
        {"indexed": False, "name": "bid", "type": "uint256"},
        {"indexed": True, "name": "gal", "type": "address"},
        {"indexed": False, "name": "end", "type": "uint48"},
        {"indexed": True, "name": "urn", "type": "bytes32"},
        {"indexed": False, "name": "tab", "type": "uint256"},
    ],
}


class FlipKickEntity(Struct):
    bid_id: int
    lot: int
    bid: int
    gal: str
    end: int
    urn: bytes
    tab: int
    transaction_index: int
    log_index: int
    raw: Any = None


class FlipKickModel(Struct):
    bid_id: str
    lot: str
    bid: str
    gal: str
    end: datetime
    urn: str
    tab: str
    tx_idx: int
    log_idx: int
    raw_log: str


def entity_from_event(event_data: Any, raw_log: RawLog) -> FlipKickEntity:
    args = event_data["args"]
    return FlipKickEntity(
        bid_id=args["id"],
        lot=args["lot"],
        bid=args["bid"],
        gal=args["gal"],
        end=args["end"],
        urn=bytes(args["urn"]),
        tab=args["tab"],
        transaction_index=event_data["transactionIndex"],
        log_index=event_data["logIndex"],
        raw=raw_log,
    )


def to_model(entity: FlipKickEntity) -> FlipKickModel:
    return FlipKickModel(
        bid_id=str(entity.bid_id),
        lot=str(entity.lot),
        bid=str(entity.bid),
        gal=entity.gal.lower(),
        end=datetime.fromtimestamp(entity.end, tz=timezone.utc),
        urn=Web3.to_hex(entity.urn),
        tab=str(entity.tab),
        tx_idx=entity.transaction_index,
        log_idx=entity.log_index,
        raw_log=Web3.to_json(entity.raw) if entity.raw is not None else "{}",
    )


FLIP_KICK = event_registry.register(EventDescriptor(
    name="FlipKick",
    key="flip_kick",
    abi_event_name="Kick",
    text_signature=FLIP_KICK_TEXT_SIGNATURE,
    entity_type=FlipKickEntity,
    model_type=FlipKickModel,
    entity_from_event=entity_from_event,
    to_model=to_model,
    table=DBFlipKick,
))

FLIP_KICK_SIGNATURE = FLIP_KICK.signature
