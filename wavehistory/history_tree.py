"""Branching history tree: the core of the undo/redo engine.

The tree records every operation ever applied. Undoing moves the current
pointer up; adding an operation after an undo creates a sibling branch
instead of discarding the undone future. Nothing is lost until clear().

    HistoryTree
    ├── root ("Initial state", no operation)
    │   └── node-1 "Add signal clk"
    │       ├── node-2 "Set format hex"        (older branch)
    │       └── node-3 "Rename clk"            (newest branch, redo target)
    │           └── node-4 "Add marker A"      <- current
    └── current_id: "node-4"

Nodes live in an arena (dict keyed by node id); parent and child links are
ids, not object references. Walking from root to current and replaying each
node's operation reconstructs the observable state from a blank slate, and
every method here preserves that.
"""

import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .config import HISTORY
from .protocols import Operation

logger = logging.getLogger(__name__)

# NodeID is an opaque identifier for a HistoryNode. Views and callers hold
# ids rather than node objects, so a stale id after clear() simply fails to
# resolve instead of pointing into a discarded tree.
NodeID = str


@dataclass
class HistoryNode:
    """One point in the history tree."""
    id: NodeID
    operation: Optional[Operation]
    description: str
    timestamp: float = field(default_factory=time.time)
    parent_id: Optional[NodeID] = None
    children: List[NodeID] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class HistoryTree:
    """Tree-structured operation history with a movable current pointer."""

    def __init__(self) -> None:
        self._nodes: Dict[NodeID, HistoryNode] = {}
        # Ids stay unique for the lifetime of the tree, including across clear()
        self._id_counter = itertools.count()
        self._root_id: NodeID = self._create_root()
        self._current_id: NodeID = self._root_id

    def _create_root(self) -> NodeID:
        root = HistoryNode(id=self._generate_node_id(), operation=None,
                           description=HISTORY.ROOT_DESCRIPTION)
        self._nodes[root.id] = root
        return root.id

    def _generate_node_id(self) -> NodeID:
        return f"{HISTORY.NODE_ID_PREFIX}{next(self._id_counter)}"

    # ---- Queries ----
    @property
    def root_id(self) -> NodeID:
        return self._root_id

    @property
    def current_id(self) -> NodeID:
        return self._current_id

    def get_node(self, node_id: NodeID) -> Optional[HistoryNode]:
        return self._nodes.get(node_id)

    def get_root_node(self) -> HistoryNode:
        return self._nodes[self._root_id]

    def get_current_node(self) -> HistoryNode:
        return self._nodes[self._current_id]

    def get_all_nodes(self) -> Dict[NodeID, HistoryNode]:
        """Get a shallow copy of the node arena keyed by id."""
        return dict(self._nodes)

    def get_children(self, node_id: NodeID) -> List[HistoryNode]:
        """Get the child nodes of node_id in creation order (empty if unknown)."""
        node = self._nodes.get(node_id)
        if node is None:
            return []
        return [self._nodes[child_id] for child_id in node.children]

    def get_path(self, node_id: NodeID) -> List[NodeID]:
        """Get the ancestor chain of a node.

        Args:
            node_id: Node to resolve

        Returns:
            Ids from root to node_id inclusive, or an empty list if the id
            does not name a node in this tree
        """
        path: List[NodeID] = []
        node = self._nodes.get(node_id)
        while node is not None:
            path.append(node.id)
            node = self._nodes.get(node.parent_id) if node.parent_id is not None else None
        path.reverse()
        return path

    def get_current_path(self) -> List[NodeID]:
        return self.get_path(self._current_id)

    def can_undo(self) -> bool:
        return self._current_id != self._root_id

    def can_redo(self) -> bool:
        return len(self._nodes[self._current_id].children) > 0

    def size(self) -> int:
        """Total node count including the root."""
        return len(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[HistoryNode]:
        return iter(list(self._nodes.values()))

    # ---- Recording ----
    def add_operation(self, operation: Operation) -> NodeID:
        """Apply an operation and record it as the newest child of current.

        If operation.do() raises, nothing is recorded.

        Returns:
            Id of the new current node
        """
        operation.do()
        return self.add_operation_without_executing(operation)

    def add_operation_without_executing(self, operation: Operation) -> NodeID:
        """Record an operation the caller has already applied.

        Returns:
            Id of the new current node
        """
        parent = self._nodes[self._current_id]
        node = HistoryNode(
            id=self._generate_node_id(),
            operation=operation,
            description=operation.describe(),
            parent_id=parent.id,
        )
        self._nodes[node.id] = node
        parent.children.append(node.id)
        self._current_id = node.id
        logger.debug("Recorded %s '%s' under %s", node.id, node.description, parent.id)
        return node.id

    # ---- Movement ----
    def undo(self) -> bool:
        """Reverse the current node's operation and move to its parent.

        Returns:
            False if current is the root, True otherwise
        """
        node = self._nodes[self._current_id]
        if node.parent_id is None or node.operation is None:
            return False
        node.operation.undo()
        self._current_id = node.parent_id
        return True

    def redo(self) -> bool:
        """Re-apply the newest child of current and move to it.

        At a fork the most recently created branch wins, regardless of which
        branch was visited last.

        Returns:
            False if current has no children, True otherwise
        """
        node = self._nodes[self._current_id]
        if not node.children:
            return False
        child = self._nodes[node.children[-1]]
        self._apply_redo(child)
        return True

    def navigate_to(self, node_id: NodeID) -> bool:
        """Move current to any node, undoing and redoing along the way.

        Undoes from current up to the lowest common ancestor of current and
        the target, then redoes down the exact branch that leads to the
        target. current is updated after every single step, so if an
        operation raises, current still names the last state actually applied.

        Returns:
            False if node_id is unknown, True otherwise
        """
        if node_id not in self._nodes:
            return False
        if node_id == self._current_id:
            return True

        current_path = self.get_current_path()
        target_path = self.get_path(node_id)

        common = 0
        for current_step, target_step in zip(current_path, target_path):
            if current_step != target_step:
                break
            common += 1
        lca_id = target_path[common - 1]

        logger.debug("Navigating %s -> %s via %s (%d undo, %d redo)",
                     self._current_id, node_id, lca_id,
                     len(current_path) - common, len(target_path) - common)

        while self._current_id != lca_id:
            self.undo()

        for step_id in target_path[common:]:
            self._apply_redo(self._nodes[step_id])

        return True

    def _apply_redo(self, node: HistoryNode) -> None:
        if node.operation is not None:
            node.operation.redo()
        self._current_id = node.id

    def clear(self) -> None:
        """Discard every node and start over from a fresh root.

        No operation is undone; the caller is expected to reset the
        underlying state itself (e.g. when loading a new waveform).
        """
        discarded = len(self._nodes)
        self._nodes.clear()
        self._root_id = self._create_root()
        self._current_id = self._root_id
        logger.debug("Cleared history (%d nodes discarded)", discarded)
