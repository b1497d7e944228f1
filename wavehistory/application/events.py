"""Event classes published by the history coordinator."""

from dataclasses import dataclass, field
from typing import Literal
import time

from wavehistory.history_tree import NodeID


@dataclass(frozen=True, kw_only=True)
class Event:
    """Base class for all events."""
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True, kw_only=True)
class HistoryChangedEvent(Event):
    """Base class for every change to a history tree or its current pointer."""
    pass


@dataclass(frozen=True, kw_only=True)
class OperationRecordedEvent(HistoryChangedEvent):
    """Emitted when a new node is added to the tree."""
    node_id: NodeID
    description: str
    batched: bool = False


@dataclass(frozen=True, kw_only=True)
class CurrentMovedEvent(HistoryChangedEvent):
    """Emitted when undo, redo or navigation moves the current pointer."""
    action: Literal['undo', 'redo', 'navigate']
    old_current_id: NodeID
    new_current_id: NodeID


@dataclass(frozen=True, kw_only=True)
class HistoryClearedEvent(HistoryChangedEvent):
    """Emitted when the whole history is discarded."""
    root_id: NodeID


@dataclass(frozen=True, kw_only=True)
class BatchStateChangedEvent(Event):
    """Emitted when a batch opens or closes.

    Not a history change: the tree is untouched, only whether undo, redo and
    navigation are currently allowed.
    """
    batching: bool
    description: str
