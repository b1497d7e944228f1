"""Protocol definitions for decoupling the history engine from caller operations."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Operation(Protocol):
    """Protocol for an atomic, reversible unit of work.

    The history engine never inspects an operation beyond these four members,
    so any object providing them can be recorded: signal edits, marker moves,
    format changes, or a CompositeOperation grouping several of those.
    """

    def do(self) -> None:
        """Apply the forward effect."""
        ...

    def undo(self) -> None:
        """Reverse the effect applied by the most recent do() or redo()."""
        ...

    def redo(self) -> None:
        """Re-apply the effect after an undo().

        For atomic operations this must be equivalent to do().
        """
        ...

    def describe(self) -> str:
        """Get a stable, human-readable label.

        Returns:
            Label shown in history views, e.g. "Add signal clk"
        """
        ...
