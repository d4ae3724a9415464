# maker_indexer/events/__init__.py

from .base import EventDescriptor, EventRegistry, event_registry, event_topic
from .flip_kick import (
    FLIP_KICK,
    FLIP_KICK_SIGNATURE,
    FLIP_KICK_EVENT_ABI,
    FlipKickEntity,
    FlipKickModel,
)

__all__ = [
    'EventDescriptor',
    'EventRegistry',
    'event_registry',
    'event_topic',
    'FLIP_KICK',
    'FLIP_KICK_SIGNATURE',
    'FLIP_KICK_EVENT_ABI',
    'FlipKickEntity',
    'FlipKickModel',
]
