"""wavehistory - Branching undo/redo engine for the waveform viewer."""

__version__ = "0.1.0"

from .protocols import Operation
from .operations import CompositeOperation, FunctionOperation
from .history_tree import HistoryTree, HistoryNode, NodeID
from .history_coordinator import (
    HistoryCoordinator, HistoryError, BatchError, BatchAlreadyOpenError,
    NoBatchOpenError, BatchInProgressError
)
from .application.event_bus import EventBus
from .application.events import (
    HistoryChangedEvent, OperationRecordedEvent, CurrentMovedEvent, HistoryClearedEvent,
    BatchStateChangedEvent
)
from .demo import create_demo_history
from .config import HISTORY, TIME_FORMAT, COLORS, VIEW

__all__ = [
    'Operation', 'CompositeOperation', 'FunctionOperation',
    'HistoryTree', 'HistoryNode', 'NodeID',
    'HistoryCoordinator', 'HistoryError', 'BatchError', 'BatchAlreadyOpenError',
    'NoBatchOpenError', 'BatchInProgressError',
    'EventBus', 'HistoryChangedEvent', 'OperationRecordedEvent', 'CurrentMovedEvent',
    'HistoryClearedEvent', 'BatchStateChangedEvent', 'create_demo_history',
    'HISTORY', 'TIME_FORMAT', 'COLORS', 'VIEW'
]
