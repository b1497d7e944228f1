"""
History View Widget

A widget that shows the branching undo history of one document, with Undo
and Redo buttons above the tree. Activating (double-clicking or pressing
Enter on) a node navigates the history to it.
"""

from typing import Callable, Optional
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QTreeView, QPushButton, QLabel,
    QAbstractItemView
)
from PySide6.QtCore import Signal, QModelIndex
from PySide6.QtGui import QFont

from .application.event_bus import EventBus
from .application.events import BatchStateChangedEvent, HistoryChangedEvent
from .config import VIEW
from .history_coordinator import HistoryCoordinator
from .history_tree_model import HistoryTreeModel


class HistoryView(QWidget):
    """
    Undo history panel bound to a single HistoryCoordinator
    """

    # Signals
    node_navigated = Signal(str)  # Id of the node that became current

    def __init__(self, coordinator: HistoryCoordinator, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.coordinator = coordinator
        self.model = HistoryTreeModel(coordinator, self)

        self._setup_ui()
        self._connect_signals()

        # Subscribed after the model so the model has reset before we sync
        bus = coordinator.event_bus
        history_handler = self._on_history_changed
        batch_handler = self._on_batch_state_changed
        bus.subscribe(HistoryChangedEvent, history_handler)
        bus.subscribe(BatchStateChangedEvent, batch_handler)
        self.destroyed.connect(lambda: _unsubscribe(bus, history_handler, batch_handler))
        self._sync_with_history()

    def _setup_ui(self) -> None:
        """Create the UI structure"""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        # Header
        header_widget = QWidget()
        header_layout = QHBoxLayout(header_widget)
        header_layout.setContentsMargins(5, 5, 5, 5)

        self.header_label = QLabel(VIEW.HEADER_TEXT)
        header_font = QFont()
        header_font.setBold(True)
        self.header_label.setFont(header_font)
        header_layout.addWidget(self.header_label)
        header_layout.addStretch()

        self.undo_button = QPushButton("Undo")
        self.undo_button.setToolTip("Undo the last action")
        header_layout.addWidget(self.undo_button)

        self.redo_button = QPushButton("Redo")
        self.redo_button.setToolTip("Redo into the newest branch")
        header_layout.addWidget(self.redo_button)

        layout.addWidget(header_widget)

        # Tree
        self.tree_view = QTreeView()
        self.tree_view.setModel(self.model)
        self.tree_view.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.tree_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.tree_view.setColumnWidth(HistoryTreeModel.COLUMN_OPERATION, VIEW.OPERATION_COLUMN_WIDTH)
        self.tree_view.setUniformRowHeights(True)
        layout.addWidget(self.tree_view)

        self.setMinimumWidth(VIEW.MIN_WIDTH)

    def _connect_signals(self) -> None:
        self.undo_button.clicked.connect(self._on_undo_clicked)
        self.redo_button.clicked.connect(self._on_redo_clicked)
        self.tree_view.activated.connect(self._on_node_activated)
        self.tree_view.doubleClicked.connect(self._on_node_activated)

    def _on_undo_clicked(self) -> None:
        if not self.coordinator.is_batching:
            self.coordinator.undo()

    def _on_redo_clicked(self) -> None:
        if not self.coordinator.is_batching:
            self.coordinator.redo()

    def _on_node_activated(self, index: QModelIndex) -> None:
        # activated and doubleClicked can both fire for one double-click;
        # the second call lands on the current node and is a no-op
        node_id = self.model.node_id_from_index(index)
        if node_id is None or node_id == self.coordinator.tree.current_id:
            return
        if self.coordinator.is_batching:
            return
        if self.model.navigate_to_index(index):
            self.node_navigated.emit(node_id)

    def _on_history_changed(self, event: HistoryChangedEvent) -> None:
        self._sync_with_history()

    def _on_batch_state_changed(self, event: BatchStateChangedEvent) -> None:
        self._update_buttons()

    def _sync_with_history(self) -> None:
        """Expand the tree, select the current node and refresh button states."""
        self.tree_view.expandAll()
        current = self.model.current_index()
        if current.isValid():
            self.tree_view.setCurrentIndex(current)
            self.tree_view.scrollTo(current)
        self._update_buttons()

    def _update_buttons(self) -> None:
        batching = self.coordinator.is_batching
        self.undo_button.setEnabled(self.coordinator.can_undo() and not batching)
        self.redo_button.setEnabled(self.coordinator.can_redo() and not batching)

    def detach(self) -> None:
        """Stop listening to the coordinator."""
        _unsubscribe(self.coordinator.event_bus, self._on_history_changed, self._on_batch_state_changed)
        self.model.detach()


def _unsubscribe(bus: EventBus, history_handler: Callable[[HistoryChangedEvent], None],
                 batch_handler: Callable[[BatchStateChangedEvent], None]) -> None:
    bus.unsubscribe(HistoryChangedEvent, history_handler)
    bus.unsubscribe(BatchStateChangedEvent, batch_handler)
