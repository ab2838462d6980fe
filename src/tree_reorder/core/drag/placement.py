"""Turn a projection into sibling anchors for the store, rejecting invalid drops."""

import dataclasses
from collections.abc import Iterable, Sequence

from loguru import logger

from tree_reorder.core.drag.projection import index_of
from tree_reorder.core.tree.moves import array_move
from tree_reorder.models.node import (
    DropRejected,
    FlattenedItem,
    NodeId,
    Placement,
    Projection,
    RejectReason,
)


def is_descendant(
    items: Sequence[FlattenedItem], candidate_parent_id: NodeId | None, active_id: NodeId
) -> bool:
    """True if ``candidate_parent_id`` is ``active_id`` or lies below it.

    The walk up the parent chain is bounded by the number of items; a chain
    that does not end within that many steps is looping and counts as a
    descendant.
    """
    parents = {item.id: item.parent_id for item in items}
    current = candidate_parent_id
    for _ in range(len(parents) + 1):
        if current is None:
            return False
        if current == active_id:
            return True
        current = parents.get(current)
    logger.warning("Parent chain above {} does not terminate", candidate_parent_id)
    return True


def _nearest_sibling(
    items: Sequence[FlattenedItem],
    indices: Iterable[int],
    parent_id: NodeId | None,
    depth: int,
) -> NodeId | None:
    for i in indices:
        item = items[i]
        if item.parent_id == parent_id:
            return item.id
        # A shallower item closes the sibling group.
        if item.depth < depth:
            return None
    return None


def resolve_drop(
    items: Sequence[FlattenedItem],
    active_id: NodeId,
    over_id: NodeId | None,
    projection: Projection | None,
) -> Placement | DropRejected:
    """Resolve the final placement of a drop, or reject it.

    Rejected drops: no projection, unknown ids, dropping an item onto itself
    without changing its parent, dropping it onto its own subtree, and any
    parent that would create a cycle.
    """
    if projection is None:
        return DropRejected(RejectReason.NO_PROJECTION)

    active_index = index_of(items, active_id)
    over_index = index_of(items, over_id)
    if active_index is None or over_index is None:
        return DropRejected(RejectReason.NOT_FOUND)

    active_item = items[active_index]
    if active_id == over_id and projection.parent_id == active_item.node.parent_id:
        logger.debug("Drop of {} onto itself with unchanged parent ignored", active_id)
        return DropRejected(RejectReason.SELF_DROP)

    if over_id != active_id and is_descendant(items, over_id, active_id):
        logger.debug("Drop of {} onto its own descendant {} rejected", active_id, over_id)
        return DropRejected(RejectReason.CYCLE)

    if is_descendant(items, projection.parent_id, active_id):
        logger.debug(
            "Drop of {} under {} rejected: would create a cycle", active_id, projection.parent_id
        )
        return DropRejected(RejectReason.CYCLE)

    staged = list(items)
    staged[active_index] = dataclasses.replace(
        active_item, depth=projection.depth, parent_id=projection.parent_id
    )
    moved = array_move(staged, active_index, over_index)

    after_id = _nearest_sibling(
        moved, range(over_index - 1, -1, -1), projection.parent_id, projection.depth
    )
    before_id = _nearest_sibling(
        moved, range(over_index + 1, len(moved)), projection.parent_id, projection.depth
    )

    return Placement(
        active_id=active_id,
        before_id=before_id,
        after_id=after_id,
        parent_id=projection.parent_id,
        depth=projection.depth,
    )
