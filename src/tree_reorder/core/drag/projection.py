"""Project where a dragged item would land if it were dropped now."""

import math
from collections.abc import Sequence

from loguru import logger

from tree_reorder.config import INDENTATION_WIDTH
from tree_reorder.core.tree.moves import array_move
from tree_reorder.models.node import FlattenedItem, NodeId, Projection


def index_of(items: Sequence[FlattenedItem], node_id: NodeId | None) -> int | None:
    """Position of ``node_id`` in ``items``, or None."""
    if node_id is None:
        return None
    for i, item in enumerate(items):
        if item.id == node_id:
            return i
    return None


def depth_delta(offset: float, indentation_width: float) -> int:
    """Whole indentation levels covered by a horizontal offset (halves round up)."""
    if indentation_width <= 0:
        msg = f"indentation_width must be positive, got {indentation_width!r}"
        raise ValueError(msg)
    return math.floor(offset / indentation_width + 0.5)


def _parent_for_depth(
    depth: int,
    previous: FlattenedItem | None,
    preceding: Sequence[FlattenedItem],
) -> NodeId | None:
    if depth == 0 or previous is None:
        return None
    if depth == previous.depth:
        return previous.parent_id
    if depth > previous.depth:
        return previous.id
    for item in reversed(preceding):
        if item.depth == depth:
            return item.parent_id
    return None


def get_projection(
    items: Sequence[FlattenedItem],
    active_id: NodeId,
    over_id: NodeId | None,
    offset: float,
    indentation_width: float = INDENTATION_WIDTH,
) -> Projection | None:
    """Compute the depth and parent the active item would take over ``over_id``.

    The neighbours that bound the legal depth are taken from the order the
    list would have after the move, not the current one.

    Args:
        items: Visible flattened items (the active item's subtree removed).
        active_id: The dragged node.
        over_id: The hovered node.
        offset: Horizontal pointer displacement since the drag started.
        indentation_width: Pixels per nesting level.

    Returns:
        The projection, or None when either id is not in ``items``.
    """
    active_index = index_of(items, active_id)
    over_index = index_of(items, over_id)
    if active_index is None or over_index is None:
        return None

    active_item = items[active_index]
    moved = array_move(items, active_index, over_index)
    previous = moved[over_index - 1] if over_index > 0 else None
    following = moved[over_index + 1] if over_index + 1 < len(moved) else None

    projected_depth = active_item.depth + depth_delta(offset, indentation_width)
    max_depth = previous.depth + 1 if previous is not None else 0
    min_depth = following.depth if following is not None else 0

    if projected_depth >= max_depth:
        depth = max_depth
    elif projected_depth < min_depth:
        depth = min_depth
    else:
        depth = projected_depth

    parent_id = _parent_for_depth(depth, previous, moved[:over_index])

    if depth != active_item.depth or parent_id != active_item.parent_id:
        logger.debug(
            "Projection for {} over {}: depth {} -> {} (band {}..{}), parent {} -> {}",
            active_id,
            over_id,
            active_item.depth,
            depth,
            min_depth,
            max_depth,
            active_item.parent_id,
            parent_id,
        )

    return Projection(depth=depth, parent_id=parent_id, max_depth=max_depth, min_depth=min_depth)
