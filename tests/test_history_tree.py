"""Test HistoryTree structure, undo/redo and navigation."""

import pytest
from wavehistory import HistoryTree, HISTORY
from .test_utils import FailingOperation


def test_fresh_tree():
    tree = HistoryTree()
    root = tree.get_root_node()

    assert tree.size() == 1
    assert len(tree) == 1
    assert tree.current_id == tree.root_id
    assert root.is_root
    assert root.operation is None
    assert root.description == HISTORY.ROOT_DESCRIPTION
    assert not tree.can_undo()
    assert not tree.can_redo()


def test_undo_at_root_is_noop(tree):
    assert tree.undo() is False
    assert tree.current_id == tree.root_id


def test_redo_without_children_is_noop(tree, make_op):
    tree.add_operation(make_op("a"))
    current = tree.current_id

    assert tree.redo() is False
    assert tree.current_id == current


def test_add_operation_executes_and_appends(tree, make_op, state):
    node_id = tree.add_operation(make_op("a"))
    node = tree.get_node(node_id)

    assert state == ["a"]
    assert tree.current_id == node_id
    assert node.parent_id == tree.root_id
    assert node.description == "Add a"
    assert tree.get_root_node().children == [node_id]
    assert tree.can_undo()


def test_add_without_executing(tree, make_op, state):
    node_id = tree.add_operation_without_executing(make_op("a"))

    assert state == []
    assert tree.current_id == node_id
    assert tree.size() == 2


def test_failed_do_records_nothing(tree, state, log):
    with pytest.raises(RuntimeError):
        tree.add_operation(FailingOperation("bad", state, log))

    assert tree.size() == 1
    assert tree.current_id == tree.root_id


def test_round_trip(tree, make_op, state):
    """Undo N times then redo N times restores the same state."""
    for name in ("a", "b", "c", "d"):
        tree.add_operation(make_op(name))
    expected = list(state)

    for _ in range(4):
        assert tree.undo()
    assert state == []
    assert tree.current_id == tree.root_id

    for _ in range(4):
        assert tree.redo()
    assert state == expected


def test_branching(tree, make_op, state):
    """add(A); add(B); undo(); add(C) creates sibling branches B and C."""
    a = tree.add_operation(make_op("A"))
    b = tree.add_operation(make_op("B"))
    tree.undo()
    c = tree.add_operation(make_op("C"))

    assert tree.get_node(a).children == [b, c]
    assert tree.current_id == c
    assert state == ["A", "C"]

    # C has no children yet
    assert tree.redo() is False

    # Redo follows the newest branch, not the one that was undone
    tree.undo()
    assert tree.redo()
    assert tree.current_id == c
    assert state == ["A", "C"]


def test_redo_prefers_newest_branch_after_visiting_older(tree, make_op):
    a = tree.add_operation(make_op("A"))
    b = tree.add_operation(make_op("B"))
    tree.undo()
    c = tree.add_operation(make_op("C"))

    tree.navigate_to(b)
    tree.undo()
    assert tree.current_id == a

    tree.redo()
    assert tree.current_id == c


def test_navigate_to_sibling_branch(tree, make_op, state, log):
    """Root -> A -> B and Root -> C: navigating B to C undoes B, A and redoes C."""
    a = tree.add_operation(make_op("A"))
    b = tree.add_operation(make_op("B"))
    tree.undo()
    tree.undo()
    c = tree.add_operation(make_op("C"))
    tree.navigate_to(b)
    assert state == ["A", "B"]
    log.clear()

    assert tree.navigate_to(c)

    assert log == [("undo", "B"), ("undo", "A"), ("redo", "C")]
    assert tree.current_id == c
    assert state == ["C"]
    assert tree.get_path(c) == [tree.root_id, c]
    assert tree.get_path(b) == [tree.root_id, a, b]


def test_navigate_follows_requested_branch(tree, make_op, state):
    """Navigation takes the exact path to an older branch, not the newest child."""
    a = tree.add_operation(make_op("A"))
    b = tree.add_operation(make_op("B"))
    b2 = tree.add_operation(make_op("B2"))
    tree.undo()
    tree.undo()
    tree.add_operation(make_op("C"))
    tree.navigate_to(tree.root_id)
    assert state == []

    assert tree.navigate_to(b2)
    assert state == ["A", "B", "B2"]
    assert tree.get_current_path() == [tree.root_id, a, b, b2]


def test_navigate_to_ancestor_and_descendant(tree, make_op, state):
    a = tree.add_operation(make_op("A"))
    tree.add_operation(make_op("B"))
    c = tree.add_operation(make_op("C"))

    assert tree.navigate_to(a)
    assert state == ["A"]

    assert tree.navigate_to(c)
    assert state == ["A", "B", "C"]


def test_navigate_to_current_is_noop_success(tree, make_op, log):
    node_id = tree.add_operation(make_op("A"))
    log.clear()

    assert tree.navigate_to(node_id)
    assert log == []


def test_navigate_to_unknown_id(tree, make_op):
    node_id = tree.add_operation(make_op("A"))

    assert tree.navigate_to("no-such-node") is False
    assert tree.current_id == node_id


def test_navigate_failure_leaves_current_at_last_applied(tree, make_op, state, log):
    tree.add_operation(make_op("A"))
    b = tree.add_operation(FailingOperation("B", state, log, fail_on=("undo",)))

    with pytest.raises(RuntimeError, match="B failed in undo"):
        tree.navigate_to(tree.root_id)

    assert tree.current_id == b
    assert state == ["A", "B"]


def test_size_accounting(tree, make_op):
    tree.add_operation(make_op("A"))
    tree.add_operation(make_op("B"))
    tree.undo()
    already_applied = make_op("C")
    already_applied.do()
    tree.add_operation_without_executing(already_applied)
    tree.undo()
    tree.redo()
    tree.navigate_to(tree.root_id)

    assert tree.size() == 4

    tree.clear()
    assert tree.size() == 1


def test_clear_does_not_undo(tree, make_op, state, log):
    tree.add_operation(make_op("A"))
    old_root = tree.root_id
    log.clear()

    tree.clear()

    assert log == []
    assert state == ["A"]
    assert tree.current_id == tree.root_id
    assert tree.root_id != old_root
    assert old_root not in tree
    assert tree.undo() is False


def test_ids_unique_across_clear(tree, make_op):
    first = tree.add_operation(make_op("A"))
    tree.clear()
    second = tree.add_operation(make_op("B"))

    assert first != second
    assert tree.get_node(first) is None
    assert tree.navigate_to(first) is False


def test_query_surface(tree, make_op):
    a = tree.add_operation(make_op("A"))
    b = tree.add_operation(make_op("B"))
    tree.undo()
    c = tree.add_operation(make_op("C"))

    assert [n.id for n in tree.get_children(a)] == [b, c]
    assert tree.get_children("missing") == []
    assert tree.get_path("missing") == []
    assert tree.get_current_node().id == c
    assert set(tree.get_all_nodes()) == {tree.root_id, a, b, c}
    assert {node.id for node in tree} == {tree.root_id, a, b, c}
    assert tree.get_node(b).timestamp <= tree.get_node(c).timestamp

    # The arena copy does not expose internal storage
    tree.get_all_nodes().clear()
    assert tree.size() == 4


def test_description_cached_at_creation(tree, make_op):
    op = make_op("A")
    node_id = tree.add_operation(op)
    op.name = "renamed"

    assert tree.get_node(node_id).description == "Add A"
