"""Protocols for the collaborators of the reorder session."""

from typing import Any, Protocol, runtime_checkable

from tree_reorder.models.node import NodeId


@runtime_checkable
class ReorderStoreProtocol(Protocol):
    """The external store that persists a committed drop."""

    async def reorder(
        self,
        node_id: NodeId,
        before_id: NodeId | None,
        after_id: NodeId | None,
        parent_id: NodeId | None,
    ) -> None:
        """Place ``node_id`` under ``parent_id``, before ``before_id`` and after ``after_id``."""
        ...


@runtime_checkable
class ApiProtocol(Protocol):
    """Protocol for command-style API clients."""

    def call(self, command: str, args: dict[str, Any]) -> Any:
        """Invoke a command and return its decoded result."""
        ...
