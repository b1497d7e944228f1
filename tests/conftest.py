"""Common test fixtures for wavehistory tests."""

import os

# Run Qt in offscreen mode for CI/headless environments
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from wavehistory import HistoryTree, HistoryCoordinator
from .test_utils import RecordingOperation


@pytest.fixture
def state():
    """Observable state the recording operations mutate."""
    return []


@pytest.fixture
def log():
    """Ordered (action, name) log of every operation call."""
    return []


@pytest.fixture
def make_op(state, log):
    """Factory for RecordingOperation instances sharing state and log."""
    def _make(name):
        return RecordingOperation(name, state, log)
    return _make


@pytest.fixture
def tree():
    return HistoryTree()


@pytest.fixture
def coordinator():
    return HistoryCoordinator()


@pytest.fixture
def change_counter(coordinator):
    """Register a change callback on the coordinator and count its calls."""
    calls = []
    coordinator.set_on_change(lambda: calls.append(coordinator.tree.current_id))
    return calls
