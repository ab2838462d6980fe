"""Hide the descendants of collapsed and dragged nodes."""

from collections.abc import Collection, Iterable, Sequence

from tree_reorder.models.node import FlattenedItem, Node, NodeId


def remove_children_of(
    items: Iterable[FlattenedItem], hidden_root_ids: Iterable[NodeId]
) -> list[FlattenedItem]:
    """Drop every descendant of the given ids, keeping the roots themselves.

    Relies on pre-order input: a parent is always seen before its children,
    so one pass with a growing exclusion set reaches every depth.
    """
    excluded = set(hidden_root_ids)
    visible: list[FlattenedItem] = []
    for item in items:
        if item.parent_id is not None and item.parent_id in excluded:
            excluded.add(item.id)
            continue
        visible.append(item)
    return visible


def collapsed_ids(nodes: Sequence[Node], expanded_ids: Collection[NodeId]) -> frozenset[NodeId]:
    """Ids of nodes that have children but are not expanded."""
    parents = {n.parent_id for n in nodes if n.parent_id is not None}
    return frozenset(n.id for n in nodes if n.id in parents and n.id not in expanded_ids)


def hidden_root_ids(collapsed: Iterable[NodeId], active_id: NodeId | None) -> frozenset[NodeId]:
    """Combine collapsed ids with the dragged node, whose subtree travels with it."""
    hidden = set(collapsed)
    if active_id is not None:
        hidden.add(active_id)
    return frozenset(hidden)
