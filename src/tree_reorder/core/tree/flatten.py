"""Tree flattening: parent-linked nodes to a depth-annotated pre-order sequence."""

from collections import defaultdict, deque
from collections.abc import Iterable, Mapping, Sequence

from loguru import logger

from tree_reorder.models.node import FlattenedItem, Node, NodeId, TreeNode


def _order_sort_key(node: Node) -> tuple[bool, float]:
    return (node.order_key is None, node.order_key or 0.0)


def sort_siblings(nodes: Iterable[Node]) -> list[Node]:
    """Sort by order key ascending; nodes without a key go last, keeping input order."""
    return sorted(nodes, key=_order_sort_key)


def children_by_parent(nodes: Sequence[Node]) -> dict[NodeId | None, list[Node]]:
    """Group nodes by parent id, each group sorted.

    Nodes whose parent is not part of ``nodes`` are grouped under ``None``.
    """
    ids = {n.id for n in nodes}
    groups: defaultdict[NodeId | None, list[Node]] = defaultdict(list)
    for node in nodes:
        parent_id = node.parent_id if node.parent_id in ids else None
        groups[parent_id].append(node)
    return {parent_id: sort_siblings(children) for parent_id, children in groups.items()}


def _cycle_member(node: Node, by_id: Mapping[NodeId, Node]) -> Node:
    """Walk up from ``node`` until an ancestor repeats and return that ancestor."""
    seen: set[NodeId] = set()
    current = node
    while current.id not in seen:
        seen.add(current.id)
        parent = by_id.get(current.parent_id) if current.parent_id is not None else None
        if parent is None:
            return current
        current = parent
    return current


def flatten_tree(nodes: Iterable[Node]) -> list[FlattenedItem]:
    """Flatten nodes into pre-order with depth, parent and sibling index.

    Nodes whose parent is missing are treated as top-level. Nodes that are
    only reachable through a parent cycle are not dropped: each cycle is
    broken at one member, which is emitted at the top level.
    """
    nodes = list(nodes)
    groups = children_by_parent(nodes)
    result: list[FlattenedItem] = []
    placed: set[NodeId] = set()

    def walk(start: list[tuple[Node, int]], parent_id: NodeId | None, depth: int) -> None:
        stack = [(node, parent_id, depth, index) for node, index in reversed(start)]
        while stack:
            node, pid, level, index = stack.pop()
            if node.id in placed:
                continue
            placed.add(node.id)
            result.append(FlattenedItem(node=node, parent_id=pid, depth=level, index=index))
            children = groups.get(node.id, [])
            stack.extend(
                (child, node.id, level + 1, i) for i, child in reversed(list(enumerate(children)))
            )

    roots = groups.get(None, [])
    walk([(node, i) for i, node in enumerate(roots)], None, 0)

    if len(placed) < len(nodes):
        by_id = {n.id: n for n in nodes}
        next_index = len(roots)
        for node in nodes:
            if node.id in placed:
                continue
            entry = _cycle_member(node, by_id)
            logger.warning("Parent cycle through node {}; placing it at the top level", entry.id)
            walk([(entry, next_index)], None, 0)
            next_index += 1

    return result


def build_tree(items: Iterable[FlattenedItem]) -> list[TreeNode]:
    """Rebuild nested trees from a flattened sequence.

    Items must be in pre-order. An item whose parent is not in the sequence
    becomes a root.
    """
    roots: list[TreeNode] = []
    by_id: dict[NodeId, TreeNode] = {}
    for item in items:
        tree = TreeNode(node=item.node)
        by_id[item.id] = tree
        parent = by_id.get(item.parent_id) if item.parent_id is not None else None
        if parent is None:
            roots.append(tree)
        else:
            parent.children.append(tree)
    return roots


def count_descendants(nodes: Sequence[Node], node_id: NodeId) -> int:
    """Count all nodes below ``node_id``, each counted once even if the graph loops."""
    groups = children_by_parent(nodes)
    seen: set[NodeId] = {node_id}
    todo: deque[NodeId] = deque([node_id])
    count = 0
    while todo:
        current = todo.popleft()
        for child in groups.get(current, []):
            if child.id in seen:
                continue
            seen.add(child.id)
            count += 1
            todo.append(child.id)
    return count
