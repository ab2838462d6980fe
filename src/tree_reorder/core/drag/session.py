"""Drag lifecycle controller: start, move, over, end, cancel."""

import dataclasses
from collections.abc import Iterable, Sequence

from loguru import logger

from tree_reorder.config import INDENTATION_WIDTH
from tree_reorder.core.drag.placement import resolve_drop
from tree_reorder.core.drag.projection import get_projection, index_of
from tree_reorder.core.tree.flatten import flatten_tree
from tree_reorder.core.tree.moves import array_move
from tree_reorder.core.tree.visibility import hidden_root_ids, remove_children_of
from tree_reorder.models.node import (
    DropRejected,
    FlattenedItem,
    Node,
    NodeId,
    Placement,
    Projection,
    RejectReason,
)
from tree_reorder.models.session import DragPhase, DragSession, PendingPlacement
from tree_reorder.protocols import ReorderStoreProtocol


def apply_pending_placement(
    items: Sequence[FlattenedItem], pending: PendingPlacement
) -> list[FlattenedItem]:
    """Show a committed drop before the store confirms it.

    Repeats the move the projection was computed on: the active item goes
    to the hovered position with the pending depth and parent.
    """
    active_index = index_of(items, pending.active_id)
    over_index = index_of(items, pending.over_id)
    if active_index is None or over_index is None:
        return list(items)
    staged = list(items)
    staged[active_index] = dataclasses.replace(
        items[active_index], depth=pending.depth, parent_id=pending.parent_id
    )
    return array_move(staged, active_index, over_index)


class ReorderSession:
    """Owns the drag state for one list and commits drops to the store.

    The state is a frozen ``DragSession`` swapped on each transition.
    Node snapshots come in through ``update_nodes``; a pending placement is
    cleared as soon as a snapshot newer than the commit arrives.
    """

    def __init__(
        self,
        store: ReorderStoreProtocol,
        nodes: Iterable[Node] = (),
        *,
        collapsed: Iterable[NodeId] = (),
        indentation_width: float = INDENTATION_WIDTH,
    ) -> None:
        self.store = store
        self.indentation_width = indentation_width
        self._nodes: tuple[Node, ...] = tuple(nodes)
        self._version = 0
        self._collapsed: frozenset[NodeId] = frozenset(collapsed)
        self._state = DragSession()

    @property
    def state(self) -> DragSession:
        return self._state

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._nodes

    @property
    def version(self) -> int:
        return self._version

    @property
    def collapsed(self) -> frozenset[NodeId]:
        return self._collapsed

    def _set_state(self, state: DragSession) -> None:
        if state.phase is not self._state.phase:
            logger.debug("Drag session {} -> {}", self._state.phase, state.phase)
        self._state = state

    # --- Inputs from the store and UI state ---

    def update_nodes(self, nodes: Iterable[Node]) -> None:
        """Replace the node snapshot; a newer snapshot settles a pending commit."""
        if nodes is self._nodes:
            return
        self._nodes = tuple(nodes)
        self._version += 1
        pending = self._state.pending
        if pending is not None and pending.snapshot_version < self._version:
            logger.debug("Snapshot {} settled pending move of {}", self._version, pending.active_id)
            self._set_state(dataclasses.replace(self._state, phase=DragPhase.IDLE, pending=None))

    def set_collapsed(self, ids: Iterable[NodeId]) -> None:
        self._collapsed = frozenset(ids)

    def toggle_collapsed(self, node_id: NodeId) -> bool:
        """Flip the collapsed state of ``node_id``; returns True if now collapsed."""
        if node_id in self._collapsed:
            self._collapsed = self._collapsed - {node_id}
            return False
        self._collapsed = self._collapsed | {node_id}
        return True

    # --- Derived views ---

    def visible_items(self) -> list[FlattenedItem]:
        """Flattened items as they should be shown right now."""
        state = self._state
        items = flatten_tree(self._nodes)
        if state.pending is not None:
            hidden = hidden_root_ids(self._collapsed, state.pending.active_id)
            return apply_pending_placement(remove_children_of(items, hidden), state.pending)
        return remove_children_of(items, hidden_root_ids(self._collapsed, state.active_id))

    @property
    def projection(self) -> Projection | None:
        state = self._state
        if not state.is_dragging or state.active_id is None or state.over_id is None:
            return None
        return get_projection(
            self.visible_items(),
            state.active_id,
            state.over_id,
            state.horizontal_offset,
            self.indentation_width,
        )

    # --- Drag lifecycle ---

    def on_drag_start(self, node_id: NodeId) -> bool:
        """Begin a drag; returns False if another gesture or commit is in progress."""
        if self._state.phase is not DragPhase.IDLE:
            logger.warning("Ignoring drag start on {} while {}", node_id, self._state.phase)
            return False
        self._set_state(
            DragSession(phase=DragPhase.DRAGGING, active_id=node_id, over_id=node_id)
        )
        return True

    def on_drag_move(self, delta_x: float) -> None:
        """Record the pointer's horizontal displacement since the drag started."""
        if self._state.is_dragging:
            self._set_state(dataclasses.replace(self._state, horizontal_offset=delta_x))

    def on_drag_over(self, target_id: NodeId | None) -> None:
        if self._state.is_dragging:
            self._set_state(dataclasses.replace(self._state, over_id=target_id))

    def on_drag_cancel(self) -> None:
        if self._state.is_dragging:
            self._set_state(DragSession())

    async def on_drag_end(self, target_id: NodeId | None) -> Placement | DropRejected:
        """Finish the drag and commit the drop to the store.

        The session leaves the dragging state before the store is called, so
        the list renders the pending placement while the commit is in flight.

        Raises:
            Exception: Whatever the store raised. The pending placement is
                dropped first, and the next snapshot is taken as-is.
        """
        state = self._state
        if not state.is_dragging or state.active_id is None:
            logger.warning("Drag end on {} without an active drag", target_id)
            return DropRejected(RejectReason.NOT_DRAGGING)

        active_id = state.active_id
        items = self.visible_items()
        projection = get_projection(
            items, active_id, target_id, state.horizontal_offset, self.indentation_width
        )
        result = resolve_drop(items, active_id, target_id, projection)
        if isinstance(result, DropRejected):
            logger.debug("Drop of {} on {} rejected: {}", active_id, target_id, result.reason)
            self._set_state(DragSession())
            return result

        pending = PendingPlacement(
            active_id=active_id,
            over_id=target_id,
            depth=result.depth,
            parent_id=result.parent_id,
            snapshot_version=self._version,
        )
        self._set_state(DragSession(phase=DragPhase.COMMITTING, pending=pending))

        try:
            await self.store.reorder(active_id, result.before_id, result.after_id, result.parent_id)
        except Exception:
            logger.exception("Reorder of {} failed, dropping optimistic placement", active_id)
            if self._state.pending is pending:
                self._set_state(DragSession())
            raise

        return result
