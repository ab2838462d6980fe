"""Tests for tree flattening and rebuilding."""

from tree_reorder.core.tree.flatten import (
    build_tree,
    count_descendants,
    flatten_tree,
    sort_siblings,
)
from tree_reorder.models.node import FlattenedItem, Node, TreeNode


def assert_depth_invariant(items: list[FlattenedItem]) -> None:
    by_id = {item.id: item for item in items}
    for item in items:
        if item.parent_id is None:
            assert item.depth == 0
        else:
            assert item.depth == by_id[item.parent_id].depth + 1


def relations(trees: list[TreeNode], parent: object = None) -> set[tuple[object, object]]:
    result: set[tuple[object, object]] = set()
    for tree in trees:
        result.add((tree.id, parent))
        result |= relations(tree.children, tree.id)
    return result


def test_flatten_is_preorder_with_depths(small_tree: list[Node]) -> None:
    items = flatten_tree(small_tree)
    assert [i.id for i in items] == [1, 2, 4, 3]
    assert [i.depth for i in items] == [0, 1, 2, 1]
    assert [i.parent_id for i in items] == [None, 1, 2, 1]


def test_flatten_annotates_sibling_index(small_tree: list[Node]) -> None:
    items = {i.id: i for i in flatten_tree(small_tree)}
    assert items[1].index == 0
    assert items[2].index == 0
    assert items[4].index == 0
    assert items[3].index == 1


def test_flatten_sorts_siblings_by_order_key() -> None:
    nodes = [
        Node(id="late", order_key=30.0),
        Node(id="early", order_key=5.0),
        Node(id="middle", order_key=15.5),
    ]
    assert [i.id for i in flatten_tree(nodes)] == ["early", "middle", "late"]


def test_missing_order_keys_sort_last_in_input_order() -> None:
    nodes = [
        Node(id="u1"),
        Node(id="k2", order_key=2.0),
        Node(id="u2"),
        Node(id="k1", order_key=1.0),
    ]
    assert [n.id for n in sort_siblings(nodes)] == ["k1", "k2", "u1", "u2"]


def test_zero_order_key_sorts_before_missing_key() -> None:
    nodes = [Node(id="none"), Node(id="zero", order_key=0.0), Node(id="neg", order_key=-1.0)]
    assert [n.id for n in sort_siblings(nodes)] == ["neg", "zero", "none"]


def test_node_with_missing_parent_becomes_top_level() -> None:
    nodes = [
        Node(id=1, order_key=10.0),
        Node(id=2, parent_id=99, order_key=5.0),
        Node(id=3, parent_id=2, order_key=1.0),
    ]
    items = flatten_tree(nodes)
    assert [i.id for i in items] == [2, 3, 1]
    orphan = items[0]
    assert orphan.parent_id is None
    assert orphan.depth == 0
    assert orphan.node.parent_id == 99
    assert_depth_invariant(items)


def test_parent_cycle_does_not_drop_nodes() -> None:
    nodes = [
        Node(id="x", parent_id="y", order_key=10.0),
        Node(id="y", parent_id="x", order_key=20.0),
        Node(id="z", order_key=10.0),
    ]
    items = flatten_tree(nodes)
    assert [i.id for i in items] == ["z", "x", "y"]
    assert [i.depth for i in items] == [0, 0, 1]
    assert_depth_invariant(items)


def test_self_parented_node_is_emitted_once() -> None:
    items = flatten_tree([Node(id=1, parent_id=1), Node(id=2)])
    assert sorted(i.id for i in items) == [1, 2]
    assert all(i.depth == 0 for i in items)


def test_flatten_output_length_matches_input(deep_tree: list[Node]) -> None:
    items = flatten_tree(deep_tree)
    assert len(items) == len(deep_tree)
    assert len({i.id for i in items}) == len(deep_tree)
    assert_depth_invariant(items)


def test_flatten_is_deterministic_and_pure(deep_tree: list[Node]) -> None:
    snapshot = list(deep_tree)
    assert flatten_tree(deep_tree) == flatten_tree(reversed(deep_tree))
    assert deep_tree == snapshot


def test_build_tree_reproduces_parent_relations(deep_tree: list[Node]) -> None:
    trees = build_tree(flatten_tree(deep_tree))
    expected = {(n.id, n.parent_id) for n in deep_tree}
    assert relations(trees) == expected
    assert [t.id for t in trees] == ["a", "e", "f"]


def test_build_tree_keeps_sibling_order(small_tree: list[Node]) -> None:
    (root,) = build_tree(flatten_tree(small_tree))
    assert [c.id for c in root.children] == [2, 3]
    assert [c.id for c in root.children[0].children] == [4]


def test_count_descendants(deep_tree: list[Node]) -> None:
    assert count_descendants(deep_tree, "a") == 3
    assert count_descendants(deep_tree, "f") == 1
    assert count_descendants(deep_tree, "d") == 0


def test_count_descendants_terminates_on_cycle() -> None:
    nodes = [Node(id=1, parent_id=2), Node(id=2, parent_id=1), Node(id=3, parent_id=2)]
    assert count_descendants(nodes, 1) == 2
