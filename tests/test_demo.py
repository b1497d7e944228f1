"""Test the sample branching history."""

from wavehistory import create_demo_history


def test_demo_history_shape():
    state = {}
    coordinator = create_demo_history(state)
    tree = coordinator.tree

    assert tree.size() == 6
    assert state == {"step": 5, "value": "Removed signal A"}

    path = tree.get_current_path()
    descriptions = [tree.get_node(node_id).description for node_id in path]
    assert descriptions == ["Initial state", "Open waveform", "Add signal A", "Remove signal A"]

    branches = [node.description for node in tree.get_children(path[2])]
    assert branches == ["Modify signal A", "Add signal B", "Remove signal A"]


def test_demo_history_navigation_restores_state():
    state = {}
    coordinator = create_demo_history(state)
    tree = coordinator.tree
    add_a = tree.get_current_path()[2]
    modify, add_b, _ = tree.get_node(add_a).children

    assert coordinator.navigate_to(modify)
    assert state == {"step": 3, "value": "Modified signal A"}

    assert coordinator.navigate_to(add_b)
    assert state == {"step": 4, "value": "Added signal B"}

    assert coordinator.navigate_to(tree.root_id)
    assert state == {"step": 0, "value": "Empty"}
