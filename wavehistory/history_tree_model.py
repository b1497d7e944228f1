"""History Tree Model - Qt view of a HistoryCoordinator's branching history.

The model exposes the whole history tree to a QTreeView. The single top-level
row is the root ("Initial state"); every node's children appear in the order
their branches were created, so the newest branch (the one redo() follows) is
always the last child.

    ┌──────────────────────────────┬──────────┐
    │ Operation                    │ Time     │   (Column Headers)
    ├──────────────────────────────┼──────────┤
    │ [-] Initial state            │ 10:42    │
    │  └─ [-] Add signal clk       │ 5m ago   │
    │      ├─ Set format hex       │ 4m ago   │   (Older branch)
    │      └─ Rename clk           │ just now │   (Current node, bold)
    └──────────────────────────────┴──────────┘

The model never mutates history itself except through navigate_to_index(),
which asks the coordinator to move the current pointer. It listens for
HistoryChangedEvent on the coordinator's event bus and resets on each one.
"""

from typing import Optional, Union, overload, Any
from PySide6.QtCore import QAbstractItemModel, QModelIndex, QPersistentModelIndex, Qt, QObject
from PySide6.QtGui import QBrush, QColor, QFont

from .application.events import HistoryChangedEvent
from .config import COLORS
from .history_coordinator import HistoryCoordinator
from .history_tree import HistoryNode, NodeID
from .time_utils import format_relative_time


class HistoryTreeModel(QAbstractItemModel):
    """Tree model presenting every node of a history tree."""

    COLUMN_OPERATION = 0
    COLUMN_TIME = 1
    HEADERS = ("Operation", "Time")

    def __init__(self, coordinator: HistoryCoordinator, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.coordinator = coordinator
        bus = coordinator.event_bus
        handler = self._on_history_changed
        bus.subscribe(HistoryChangedEvent, handler)
        # The C++ object is gone by the time destroyed fires, so the slot must not touch self
        self.destroyed.connect(lambda: bus.unsubscribe(HistoryChangedEvent, handler))

    def _on_history_changed(self, event: HistoryChangedEvent) -> None:
        self.refresh()

    def refresh(self) -> None:
        """Rebuild all indexes from the current tree state."""
        self.beginResetModel()
        self.endResetModel()

    def detach(self) -> None:
        """Stop listening to the coordinator (call before discarding the model)."""
        self.coordinator.event_bus.unsubscribe(HistoryChangedEvent, self._on_history_changed)

    # ---- Node helpers ----
    def _row_of(self, node: HistoryNode) -> int:
        if node.parent_id is None:
            return 0
        parent_node = self.coordinator.tree.get_node(node.parent_id)
        if parent_node is None:
            return 0
        return parent_node.children.index(node.id)

    def _node_from_index(self, index: Union[QModelIndex, QPersistentModelIndex]) -> Optional[HistoryNode]:
        if not index.isValid():
            return None
        node = index.internalPointer()
        # Indexes created before a clear() point at discarded nodes
        if not isinstance(node, HistoryNode) or node.id not in self.coordinator.tree:
            return None
        return node

    def node_id_from_index(self, index: Union[QModelIndex, QPersistentModelIndex]) -> Optional[NodeID]:
        node = self._node_from_index(index)
        return node.id if node else None

    def index_for_node(self, node_id: NodeID, column: int = 0) -> QModelIndex:
        """Get the model index for a node id (invalid index if unknown)."""
        node = self.coordinator.tree.get_node(node_id)
        if node is None:
            return QModelIndex()
        return self.createIndex(self._row_of(node), column, node)

    def current_index(self) -> QModelIndex:
        return self.index_for_node(self.coordinator.tree.current_id)

    def navigate_to_index(self, index: Union[QModelIndex, QPersistentModelIndex]) -> bool:
        """Move the history to the node at index.

        Returns:
            True if the coordinator navigated, False for invalid indexes
        """
        node_id = self.node_id_from_index(index)
        if node_id is None:
            return False
        return self.coordinator.navigate_to(node_id)

    # QAbstractItemModel interface methods

    def index(self, row: int, column: int, parent: Union[QModelIndex, QPersistentModelIndex] = QModelIndex()) -> QModelIndex:
        """Create an index for the item at (row, column) with the given parent."""
        if not self.hasIndex(row, column, parent):
            return QModelIndex()

        tree = self.coordinator.tree
        if not parent.isValid():
            if row == 0:
                return self.createIndex(row, column, tree.get_root_node())
            return QModelIndex()

        parent_node = self._node_from_index(parent)
        if parent_node and row < len(parent_node.children):
            child_node = tree.get_node(parent_node.children[row])
            return self.createIndex(row, column, child_node)

        return QModelIndex()

    @overload
    def parent(self) -> QObject: ...

    @overload
    def parent(self, index: Union[QModelIndex, QPersistentModelIndex]) -> QModelIndex: ...

    def parent(self, index: Optional[Union[QModelIndex, QPersistentModelIndex]] = None) -> Union[QModelIndex, QObject]:
        """Get the parent index of the given index or parent object."""
        if index is None:
            return super().parent()

        node = self._node_from_index(index)
        if node is None or node.parent_id is None:
            return QModelIndex()

        parent_node = self.coordinator.tree.get_node(node.parent_id)
        if parent_node is None:
            return QModelIndex()
        return self.createIndex(self._row_of(parent_node), 0, parent_node)

    def rowCount(self, parent: Union[QModelIndex, QPersistentModelIndex] = QModelIndex()) -> int:
        """Get the number of rows (children) for the given parent."""
        if parent.column() > 0:
            return 0

        if not parent.isValid():
            return 1  # The root node

        node = self._node_from_index(parent)
        return len(node.children) if node else 0

    def columnCount(self, parent: Union[QModelIndex, QPersistentModelIndex] = QModelIndex()) -> int:
        return len(self.HEADERS)

    def data(self, index: Union[QModelIndex, QPersistentModelIndex], role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        """Get data for the given index and role.

        Roles:
            - DisplayRole: description (column 0) or relative time (column 1)
            - ToolTipRole: description with node id
            - FontRole: bold for the current node
            - BackgroundRole/ForegroundRole: highlight for the current node
            - UserRole: the raw HistoryNode
        """
        node = self._node_from_index(index)
        if node is None:
            return None

        is_current = node.id == self.coordinator.tree.current_id

        if role == Qt.ItemDataRole.DisplayRole:
            if index.column() == self.COLUMN_OPERATION:
                return node.description
            if index.column() == self.COLUMN_TIME:
                return format_relative_time(node.timestamp)
        elif role == Qt.ItemDataRole.ToolTipRole:
            return f"{node.description} ({node.id})"
        elif role == Qt.ItemDataRole.FontRole and is_current:
            font = QFont()
            font.setBold(True)
            return font
        elif role == Qt.ItemDataRole.BackgroundRole and is_current:
            return QBrush(QColor(COLORS.CURRENT_NODE_BACKGROUND))
        elif role == Qt.ItemDataRole.ForegroundRole:
            if is_current:
                return QBrush(QColor(COLORS.CURRENT_NODE_TEXT))
            if index.column() == self.COLUMN_TIME:
                return QBrush(QColor(COLORS.TEXT_MUTED))
        elif role == Qt.ItemDataRole.UserRole:
            return node

        return None

    def headerData(self, section: int, orientation: Qt.Orientation,
                   role: int = Qt.ItemDataRole.DisplayRole) -> str | None:
        """Get header data."""
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            if 0 <= section < len(self.HEADERS):
                return self.HEADERS[section]
        return None

    def flags(self, index: Union[QModelIndex, QPersistentModelIndex]) -> Qt.ItemFlag:
        """Get item flags."""
        if not index.isValid():
            return Qt.ItemFlag.NoItemFlags

        return Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable
