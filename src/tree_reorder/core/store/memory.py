"""In-memory node store with anchor-based reordering."""

import dataclasses
from collections.abc import Callable, Iterable, Mapping

from loguru import logger

from tree_reorder.core.store.fractional_index import (
    generate_balanced_keys,
    generate_key_between,
    should_rebalance,
)
from tree_reorder.core.tree.flatten import flatten_tree
from tree_reorder.errors import CyclicMoveError, NodeNotFoundError
from tree_reorder.models.node import Node, NodeId

SnapshotListener = Callable[[tuple[Node, ...]], None]


def check_parent(by_id: Mapping[NodeId, Node], node_id: NodeId, parent_id: NodeId | None) -> None:
    """Raise if ``parent_id`` is missing or would make ``node_id`` its own ancestor."""
    if parent_id is None:
        return
    if parent_id == node_id:
        msg = f"Node {node_id!r} cannot be its own parent"
        raise CyclicMoveError(msg)
    if parent_id not in by_id:
        msg = f"Parent node {parent_id!r} not found"
        raise NodeNotFoundError(msg)

    current: NodeId | None = parent_id
    for _ in range(len(by_id) + 1):
        if current is None:
            return
        if current == node_id:
            msg = f"Moving {node_id!r} under {parent_id!r} would create a cycle"
            raise CyclicMoveError(msg)
        parent = by_id.get(current)
        current = parent.parent_id if parent is not None else None
    msg = f"Parent chain above {parent_id!r} does not terminate"
    raise CyclicMoveError(msg)


class InMemoryNodeStore:
    """Holds an immutable node snapshot and replaces it on every change.

    Each change bumps ``version`` and notifies subscribers with the new
    snapshot, so consumers can detect updates by identity or version.
    """

    def __init__(self, nodes: Iterable[Node] = ()) -> None:
        self._nodes: tuple[Node, ...] = tuple(nodes)
        self.version = 0
        self._listeners: list[SnapshotListener] = []

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._nodes

    def get(self, node_id: NodeId) -> Node:
        for node in self._nodes:
            if node.id == node_id:
                return node
        msg = f"Node {node_id!r} not found"
        raise NodeNotFoundError(msg)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a snapshot listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, nodes: Iterable[Node]) -> None:
        self._nodes = tuple(nodes)
        self.version += 1
        for listener in list(self._listeners):
            listener(self._nodes)

    def update_parent(self, node_id: NodeId, parent_id: NodeId | None) -> Node:
        """Re-parent a node, keeping its order key."""
        by_id = {n.id: n for n in self._nodes}
        if node_id not in by_id:
            msg = f"Node {node_id!r} not found"
            raise NodeNotFoundError(msg)
        check_parent(by_id, node_id, parent_id)

        updated = dataclasses.replace(by_id[node_id], parent_id=parent_id)
        self._publish(updated if n.id == node_id else n for n in self._nodes)
        return updated

    async def reorder(
        self,
        node_id: NodeId,
        before_id: NodeId | None,
        after_id: NodeId | None,
        parent_id: NodeId | None,
    ) -> None:
        """Move ``node_id`` under ``parent_id`` between its two anchor siblings.

        ``after_id`` is the sibling the node follows, ``before_id`` the one it
        precedes. With neither anchor the node is appended to the group.
        """
        by_id = {n.id: n for n in self._nodes}
        if node_id not in by_id:
            msg = f"Node {node_id!r} not found"
            raise NodeNotFoundError(msg)
        check_parent(by_id, node_id, parent_id)

        # Siblings as flattened: missing parents and broken cycles sit at the top level.
        siblings = [
            item.node
            for item in flatten_tree(self._nodes)
            if item.parent_id == parent_id and item.id != node_id
        ]
        sibling_ids = [n.id for n in siblings]
        for anchor in (after_id, before_id):
            if anchor is not None and anchor not in sibling_ids:
                msg = f"Anchor {anchor!r} is not a child of {parent_id!r}"
                raise NodeNotFoundError(msg)

        if after_id is not None:
            position = sibling_ids.index(after_id) + 1
        elif before_id is not None:
            position = sibling_ids.index(before_id)
        else:
            position = len(siblings)

        prev_key = siblings[position - 1].order_key if position > 0 else None
        next_key = siblings[position].order_key if position < len(siblings) else None
        key = generate_key_between(prev_key, next_key)

        changed: dict[NodeId, Node] = {}
        rebalance = (
            any(n.order_key is None for n in siblings)
            or should_rebalance(key)
            or (prev_key is not None and key <= prev_key)
            or (next_key is not None and key >= next_key)
        )
        moved = dataclasses.replace(by_id[node_id], parent_id=parent_id, order_key=key)
        if rebalance:
            group = [*siblings[:position], moved, *siblings[position:]]
            for node, balanced in zip(group, generate_balanced_keys(len(group)), strict=True):
                changed[node.id] = dataclasses.replace(node, order_key=balanced)
            logger.debug("Rebalanced {} siblings under {}", len(group), parent_id)
        else:
            changed[node_id] = moved

        self._publish(changed.get(n.id, n) for n in self._nodes)
        logger.info(
            "Moved node {} under {} (after {}, before {})", node_id, parent_id, after_id, before_id
        )
