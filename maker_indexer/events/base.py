# maker_indexer/events/base.py

from typing import Any, Callable, Dict, List, Optional, Type

from msgspec import Struct
from web3 import Web3

from ..types import RawLog


def event_topic(text_signature: str) -> str:
    """Keccak topic0 for a canonical event signature such as 'Kick(uint256,address)'"""
    return Web3.to_hex(Web3.keccak(text=text_signature))


class EventDescriptor(Struct, frozen=True):
    """
    Everything the generic transformer needs to know about one event type.

    ``entity_from_event`` builds the entity from web3 decoded event data and
    the raw log it came from; ``to_model`` projects the entity for storage.
    ``table`` is the SQLAlchemy class records are written to.
    """
    name: str
    key: str
    abi_event_name: str
    text_signature: str
    entity_type: Type
    model_type: Type
    entity_from_event: Callable[[Any, RawLog], Any]
    to_model: Callable[[Any], Any]
    table: Optional[Type] = None

    @property
    def signature(self) -> str:
        return event_topic(self.text_signature)


class EventRegistry:
    """Registry of supported event descriptors keyed by their snake_case key"""

    def __init__(self):
        self._events: Dict[str, EventDescriptor] = {}

    def register(self, descriptor: EventDescriptor) -> EventDescriptor:
        existing = self._events.get(descriptor.key)
        if existing is not None and existing is not descriptor:
            raise ValueError(f"Event '{descriptor.key}' is already registered")
        self._events[descriptor.key] = descriptor
        return descriptor

    def get(self, key: str) -> EventDescriptor:
        try:
            return self._events[key]
        except KeyError:
            available = ', '.join(sorted(self._events)) or 'none'
            raise KeyError(f"Unknown event '{key}' (registered: {available})") from None

    def keys(self) -> List[str]:
        return sorted(self._events)

    def all(self) -> List[EventDescriptor]:
        return [self._events[key] for key in self.keys()]

    def __contains__(self, key: str) -> bool:
        return key in self._events


event_registry = EventRegistry()
