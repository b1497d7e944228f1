"""Helper functions to build a sample branching history."""

from typing import Any, Dict, Optional

from .history_coordinator import HistoryCoordinator
from .operations import FunctionOperation


def make_state_operation(state: Dict[str, Any], step: int, value: str,
                         description: str) -> FunctionOperation:
    """Create an operation that sets state["step"] and state["value"].

    The previous values are captured when the operation is created, so it must
    be executed before any other operation touches the same state.
    """
    old_step = state.get("step", 0)
    old_value = state.get("value", "Empty")

    def apply() -> None:
        state["step"] = step
        state["value"] = value

    def revert() -> None:
        state["step"] = old_step
        state["value"] = old_value

    return FunctionOperation(description, do_fn=apply, undo_fn=revert)


def create_demo_history(state: Optional[Dict[str, Any]] = None) -> HistoryCoordinator:
    """Create a HistoryCoordinator whose tree branches twice.

    Resulting tree (current marked with *):

        Initial state
        └── Open waveform
            └── Add signal A
                ├── Modify signal A
                ├── Add signal B
                └── Remove signal A *

    Args:
        state: Dict the operations mutate (a fresh one is used if omitted)
    """
    if state is None:
        state = {}
    state.setdefault("step", 0)
    state.setdefault("value", "Empty")

    coordinator = HistoryCoordinator()
    coordinator.execute(make_state_operation(state, 1, "Waveform opened", "Open waveform"))
    coordinator.execute(make_state_operation(state, 2, "Added signal A", "Add signal A"))
    coordinator.execute(make_state_operation(state, 3, "Modified signal A", "Modify signal A"))

    coordinator.undo()
    coordinator.execute(make_state_operation(state, 4, "Added signal B", "Add signal B"))

    coordinator.undo()
    coordinator.execute(make_state_operation(state, 5, "Removed signal A", "Remove signal A"))

    return coordinator
