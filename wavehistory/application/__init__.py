"""Application layer: history events and the event bus that delivers them."""

from .event_bus import EventBus
from .events import (
    Event, HistoryChangedEvent, OperationRecordedEvent, CurrentMovedEvent,
    HistoryClearedEvent, BatchStateChangedEvent
)

__all__ = [
    'EventBus', 'Event', 'HistoryChangedEvent', 'OperationRecordedEvent',
    'CurrentMovedEvent', 'HistoryClearedEvent', 'BatchStateChangedEvent'
]
