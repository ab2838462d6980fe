"""Drag-and-drop reordering for hierarchical lists."""

from tree_reorder.core.drag.placement import resolve_drop
from tree_reorder.core.drag.projection import get_projection
from tree_reorder.core.drag.session import ReorderSession
from tree_reorder.core.store.memory import InMemoryNodeStore
from tree_reorder.core.tree.flatten import flatten_tree
from tree_reorder.core.tree.visibility import remove_children_of
from tree_reorder.models.node import DropRejected, FlattenedItem, Node, Placement, Projection

__all__ = [
    "DropRejected",
    "FlattenedItem",
    "InMemoryNodeStore",
    "Node",
    "Placement",
    "Projection",
    "ReorderSession",
    "flatten_tree",
    "get_projection",
    "remove_children_of",
    "resolve_drop",
]
