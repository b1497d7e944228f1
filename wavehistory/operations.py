"""Reusable Operation implementations.

CompositeOperation groups several operations into one history entry, which is
how batches are recorded. FunctionOperation adapts plain callables so existing
mutation code can be recorded without writing a class.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .protocols import Operation


class CompositeOperation:
    """Operation made of an ordered group of child operations.

    Children are NOT executed when added; do() and redo() run them in insertion
    order and undo() runs them in reverse order. A child that raises stops the
    sequence and the error propagates without rolling back earlier children.
    """

    def __init__(self, description: str) -> None:
        self.description = description
        self._operations: List[Operation] = []

    def add_operation(self, operation: Operation) -> None:
        """Append an operation to the group without executing it."""
        self._operations.append(operation)

    def get_operation_count(self) -> int:
        return len(self._operations)

    @property
    def operations(self) -> List[Operation]:
        """Copy of the child operations in insertion order."""
        return list(self._operations)

    def do(self) -> None:
        for operation in self._operations:
            operation.do()

    def undo(self) -> None:
        for operation in reversed(self._operations):
            operation.undo()

    def redo(self) -> None:
        for operation in self._operations:
            operation.redo()

    def describe(self) -> str:
        count = len(self._operations)
        if count == 0:
            return self.description
        if count == 1:
            return f"{self.description} (1 operation)"
        return f"{self.description} ({count} operations)"

    def __len__(self) -> int:
        return len(self._operations)

    def __repr__(self) -> str:
        return f"CompositeOperation({self.description!r}, operations={len(self._operations)})"


@dataclass
class FunctionOperation:
    """Operation built from plain callables.

    Example:
        >>> markers = []
        >>> op = FunctionOperation("Add marker A",
        ...                        do_fn=lambda: markers.append("A"),
        ...                        undo_fn=markers.pop)
    """

    description: str
    do_fn: Callable[[], object]
    undo_fn: Callable[[], object]
    redo_fn: Optional[Callable[[], object]] = field(default=None)

    def do(self) -> None:
        self.do_fn()

    def undo(self) -> None:
        self.undo_fn()

    def redo(self) -> None:
        if self.redo_fn is not None:
            self.redo_fn()
        else:
            self.do_fn()

    def describe(self) -> str:
        return self.description
