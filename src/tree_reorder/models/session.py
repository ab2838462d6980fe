"""Transient state of a single drag gesture."""

from dataclasses import dataclass
from enum import StrEnum

from tree_reorder.models.node import NodeId


class DragPhase(StrEnum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTING = "committing"


@dataclass(frozen=True)
class PendingPlacement:
    """Optimistic placement kept on screen until the store confirms it."""

    active_id: NodeId
    over_id: NodeId
    depth: int
    parent_id: NodeId | None
    snapshot_version: int


@dataclass(frozen=True)
class DragSession:
    """Drag state. Replaced wholesale on every transition, never mutated."""

    phase: DragPhase = DragPhase.IDLE
    active_id: NodeId | None = None
    over_id: NodeId | None = None
    horizontal_offset: float = 0.0
    pending: PendingPlacement | None = None

    @property
    def is_dragging(self) -> bool:
        return self.phase is DragPhase.DRAGGING
