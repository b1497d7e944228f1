#!/usr/bin/env python3
"""
history_explorer.py
Stand-alone window for exploring the branching undo history.

Opens a HistoryView on the demo history (or an empty one) next to a label
showing the state the operations mutate. Edit actions use the usual
shortcuts: Ctrl+Z undoes, Ctrl+Shift+Z and Ctrl+Y redo into the newest
branch, and Ctrl+N records a new step, creating a branch after an undo.
"""

import argparse
import logging
import sys
from typing import Any, Dict, Optional

import qdarkstyle
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QApplication, QLabel, QMainWindow, QSplitter, QWidget

from wavehistory import HistoryCoordinator, create_demo_history
from wavehistory.demo import make_state_operation
from wavehistory.history_view import HistoryView


class HistoryExplorerWindow(QMainWindow):
    """Main window pairing the history view with a state readout."""

    def __init__(self, coordinator: HistoryCoordinator, state: Dict[str, Any],
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.coordinator = coordinator
        self.state = state
        self.setWindowTitle("Undo History Explorer")

        self.history_view = HistoryView(coordinator)
        self.state_label = QLabel()
        self.state_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        splitter = QSplitter()
        splitter.addWidget(self.history_view)
        splitter.addWidget(self.state_label)
        self.setCentralWidget(splitter)

        self._create_actions()
        self.coordinator.set_on_change(self._update_state_label)
        self._update_state_label()

    def _create_actions(self) -> None:
        edit_menu = self.menuBar().addMenu("&Edit")

        undo_action = QAction("&Undo", self)
        undo_action.setShortcut(QKeySequence.StandardKey.Undo)
        undo_action.triggered.connect(self._undo)
        edit_menu.addAction(undo_action)

        redo_action = QAction("&Redo", self)
        redo_action.setShortcuts([QKeySequence("Ctrl+Shift+Z"), QKeySequence("Ctrl+Y")])
        redo_action.triggered.connect(self._redo)
        edit_menu.addAction(redo_action)

        edit_menu.addSeparator()

        step_action = QAction("Record &Step", self)
        step_action.setShortcut(QKeySequence("Ctrl+N"))
        step_action.triggered.connect(self._record_step)
        edit_menu.addAction(step_action)

    def _undo(self) -> None:
        if not self.coordinator.is_batching:
            self.coordinator.undo()

    def _redo(self) -> None:
        if not self.coordinator.is_batching:
            self.coordinator.redo()

    def _record_step(self) -> None:
        step = self.coordinator.tree.size()
        self.coordinator.execute(
            make_state_operation(self.state, step, f"Step {step}", f"Record step {step}")
        )

    def _update_state_label(self) -> None:
        self.state_label.setText(f"step = {self.state['step']}\nvalue = {self.state['value']}")


def main():
    """Run the history explorer."""
    parser = argparse.ArgumentParser(description="Branching undo history explorer")
    parser.add_argument("--empty", action="store_true", help="Start with an empty history instead of the demo")
    parser.add_argument("--style", choices=["native", "dark", "light"], default="native",
                        help="Widget style to apply")
    parser.add_argument("--verbose", action="store_true", help="Log history mutations")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    app = QApplication(sys.argv)
    if args.style == "dark":
        app.setStyleSheet(qdarkstyle.load_stylesheet(palette=qdarkstyle.DarkPalette))
    elif args.style == "light":
        app.setStyleSheet(qdarkstyle.load_stylesheet(palette=qdarkstyle.LightPalette))

    state: Dict[str, Any] = {"step": 0, "value": "Empty"}
    coordinator = HistoryCoordinator() if args.empty else create_demo_history(state)

    window = HistoryExplorerWindow(coordinator, state)
    window.resize(700, 400)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
