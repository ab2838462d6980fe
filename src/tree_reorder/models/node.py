"""Domain models for the reorderable tree."""

from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import StrEnum

NodeId = Hashable


@dataclass(frozen=True)
class Node:
    """A single item in the hierarchy, as supplied by the store."""

    id: NodeId
    parent_id: NodeId | None = None
    order_key: float | None = None
    title: str = ""
    completed: bool = False


@dataclass(frozen=True)
class FlattenedItem:
    """A node annotated with its position in a pre-order traversal.

    ``parent_id`` is the parent the traversal placed the node under. It
    matches ``node.parent_id`` except for orphans, which are lifted to the
    top level.
    """

    node: Node
    parent_id: NodeId | None
    depth: int
    index: int

    @property
    def id(self) -> NodeId:
        return self.node.id


@dataclass(frozen=True)
class TreeNode:
    """A nested tree rebuilt from a flattened sequence."""

    node: Node
    children: list["TreeNode"] = field(default_factory=list)

    @property
    def id(self) -> NodeId:
        return self.node.id


@dataclass(frozen=True)
class Projection:
    """Candidate depth and parent for a dragged item at the current pointer position."""

    depth: int
    parent_id: NodeId | None
    max_depth: int
    min_depth: int


@dataclass(frozen=True)
class Placement:
    """Resolved drop target handed to the store.

    ``before_id`` is the sibling the moved item now precedes and
    ``after_id`` the sibling it now follows. Either is None at the edge of
    the sibling group.
    """

    active_id: NodeId
    before_id: NodeId | None
    after_id: NodeId | None
    parent_id: NodeId | None
    depth: int


class RejectReason(StrEnum):
    NOT_DRAGGING = "not_dragging"
    NO_PROJECTION = "no_projection"
    NOT_FOUND = "not_found"
    SELF_DROP = "self_drop"
    CYCLE = "cycle"


@dataclass(frozen=True)
class DropRejected:
    """A drop that must not reach the store."""

    reason: RejectReason
