"""HistoryCoordinator: a thin non-Qt façade over HistoryTree.

The coordinator adds batch recording (several executed operations become one
history node) and change notification on top of the tree. One coordinator is
created per open document and passed explicitly to whatever needs it; there
is no module-level instance.

Notification uses typed events on an EventBus for any number of views, plus a
single callback slot (set_on_change) for the owner of the document. Events are
published before the callback runs. Opening and closing a batch publishes
BatchStateChangedEvent on the bus only; it is not a history change and does
not reach the callback.

Batching state machine:

    Idle --start_batch--> Batching --end_batch/cancel_batch--> Idle

Any other transition attempt raises a BatchError subclass.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from .application.event_bus import EventBus
from .application.events import (
    Event, OperationRecordedEvent, CurrentMovedEvent, HistoryClearedEvent,
    BatchStateChangedEvent
)
from .history_tree import HistoryTree, NodeID
from .operations import CompositeOperation
from .protocols import Operation

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class HistoryError(RuntimeError):
    """Base class for history protocol misuse."""


class BatchError(HistoryError):
    """Batch methods were called in the wrong state."""


class BatchAlreadyOpenError(BatchError):
    """start_batch() was called while a batch is open. Batches do not nest."""


class NoBatchOpenError(BatchError):
    """end_batch() or cancel_batch() was called with no batch open."""


class BatchInProgressError(BatchError):
    """The current pointer cannot move while a batch is being recorded."""


@dataclass
class HistoryCoordinator:
    """Owns one HistoryTree and records operations into it.

    Responsibilities:
    - Execute operations immediately and record them in the tree.
    - Group operations executed between start_batch() and end_batch() into a
      single CompositeOperation node.
    - Publish events and then notify the change callback after every
      successful mutation. Failed (no-op) undo/redo/navigation does not notify.

    Notes:
    - Exceptions raised by operations propagate to the caller unchanged.
    """

    tree: HistoryTree = field(default_factory=HistoryTree)
    event_bus: EventBus = field(default_factory=EventBus)
    _batch: Optional[CompositeOperation] = None
    _on_change: Optional[Callback] = None

    # ---- Subscription API ----
    def set_on_change(self, callback: Optional[Callback]) -> None:
        """Register the change callback, replacing any previous one.

        The callback runs after the matching event has been published on
        event_bus. Exceptions it raises propagate to the caller.
        """
        self._on_change = callback

    def _notify(self, event: Event) -> None:
        self.event_bus.publish(event)
        if self._on_change is not None:
            self._on_change()

    def _publish_batch_state(self, description: str) -> None:
        self.event_bus.publish(BatchStateChangedEvent(batching=self._batch is not None,
                                                      description=description))

    # ---- Recording ----
    def execute(self, operation: Operation) -> None:
        """Apply an operation and record it.

        While a batch is open the operation is applied and appended to the
        batch; the tree is untouched until end_batch().
        """
        if self._batch is not None:
            operation.do()
            self._batch.add_operation(operation)
            return

        node_id = self.tree.add_operation(operation)
        node = self.tree.get_current_node()
        self._notify(OperationRecordedEvent(node_id=node_id, description=node.description))

    # ---- Batching ----
    @property
    def is_batching(self) -> bool:
        return self._batch is not None

    def start_batch(self, description: str) -> None:
        if self._batch is not None:
            raise BatchAlreadyOpenError(
                f"Cannot start batch '{description}': batch '{self._batch.description}' is already open"
            )
        self._batch = CompositeOperation(description)
        self._publish_batch_state(description)

    def end_batch(self) -> Optional[NodeID]:
        """Close the open batch and record it as one node.

        Returns:
            Id of the new node, or None if the batch was empty and discarded
        """
        if self._batch is None:
            raise NoBatchOpenError("end_batch() called with no batch open")

        batch, self._batch = self._batch, None
        self._publish_batch_state(batch.description)
        if batch.get_operation_count() == 0:
            logger.debug("Discarding empty batch '%s'", batch.description)
            return None

        # Operations were already applied one by one in execute()
        node_id = self.tree.add_operation_without_executing(batch)
        self._notify(OperationRecordedEvent(node_id=node_id, description=batch.describe(),
                                            batched=True))
        return node_id

    def cancel_batch(self) -> None:
        """Undo every operation executed in the open batch and discard it."""
        if self._batch is None:
            raise NoBatchOpenError("cancel_batch() called with no batch open")

        batch, self._batch = self._batch, None
        self._publish_batch_state(batch.description)
        logger.debug("Cancelling batch '%s' (%d operations)",
                     batch.description, batch.get_operation_count())
        batch.undo()

    def _ensure_idle(self, action: str) -> None:
        if self._batch is not None:
            raise BatchInProgressError(
                f"Cannot {action} while batch '{self._batch.description}' is open"
            )

    # ---- Movement ----
    def undo(self) -> bool:
        self._ensure_idle("undo")
        old_id = self.tree.current_id
        if not self.tree.undo():
            return False
        self._notify(CurrentMovedEvent(action='undo', old_current_id=old_id,
                                       new_current_id=self.tree.current_id))
        return True

    def redo(self) -> bool:
        self._ensure_idle("redo")
        old_id = self.tree.current_id
        if not self.tree.redo():
            return False
        self._notify(CurrentMovedEvent(action='redo', old_current_id=old_id,
                                       new_current_id=self.tree.current_id))
        return True

    def navigate_to(self, node_id: NodeID) -> bool:
        self._ensure_idle("navigate")
        old_id = self.tree.current_id
        if not self.tree.navigate_to(node_id):
            return False
        self._notify(CurrentMovedEvent(action='navigate', old_current_id=old_id,
                                       new_current_id=self.tree.current_id))
        return True

    def can_undo(self) -> bool:
        return self.tree.can_undo()

    def can_redo(self) -> bool:
        return self.tree.can_redo()

    def clear(self) -> None:
        """Discard all history, including an open batch, without undoing anything."""
        if self._batch is not None:
            batch, self._batch = self._batch, None
            logger.debug("Discarding open batch '%s' on clear", batch.description)
            self._publish_batch_state(batch.description)
        self.tree.clear()
        self._notify(HistoryClearedEvent(root_id=self.tree.root_id))
