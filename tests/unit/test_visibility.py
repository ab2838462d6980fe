"""Tests for hiding collapsed and dragged subtrees."""

from tree_reorder.core.tree.flatten import flatten_tree
from tree_reorder.core.tree.visibility import collapsed_ids, hidden_root_ids, remove_children_of
from tree_reorder.models.node import Node


def test_collapsed_node_hides_all_descendants(deep_tree: list[Node]) -> None:
    items = remove_children_of(flatten_tree(deep_tree), {"a"})
    assert [i.id for i in items] == ["a", "e", "f", "g"]


def test_hidden_root_itself_stays_visible(small_tree: list[Node]) -> None:
    items = remove_children_of(flatten_tree(small_tree), {2})
    assert [i.id for i in items] == [1, 2, 3]


def test_nested_collapse_preserves_order(deep_tree: list[Node]) -> None:
    items = remove_children_of(flatten_tree(deep_tree), {"c", "f"})
    assert [i.id for i in items] == ["a", "b", "c", "e", "f"]


def test_no_hidden_ids_returns_everything(small_tree: list[Node]) -> None:
    items = flatten_tree(small_tree)
    assert remove_children_of(items, set()) == items


def test_integer_zero_id_can_be_collapsed() -> None:
    nodes = [Node(id=0, order_key=1.0), Node(id=5, parent_id=0, order_key=1.0)]
    items = remove_children_of(flatten_tree(nodes), {0})
    assert [i.id for i in items] == [0]


def test_collapsed_ids_only_includes_parents_not_expanded(deep_tree: list[Node]) -> None:
    assert collapsed_ids(deep_tree, expanded_ids={"a", "c"}) == frozenset({"b", "f"})


def test_hidden_root_ids_adds_active_node() -> None:
    assert hidden_root_ids({1, 2}, 7) == frozenset({1, 2, 7})
    assert hidden_root_ids({1}, None) == frozenset({1})
