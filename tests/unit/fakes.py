"""Fake implementations for testing the reorder session."""

from typing import Any

from tree_reorder.models.node import NodeId


class FakeStore:
    """Records reorder calls; raises ``error`` instead when it is set."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[NodeId, NodeId | None, NodeId | None, NodeId | None]] = []

    async def reorder(
        self,
        node_id: NodeId,
        before_id: NodeId | None,
        after_id: NodeId | None,
        parent_id: NodeId | None,
    ) -> None:
        self.calls.append((node_id, before_id, after_id, parent_id))
        if self.error is not None:
            raise self.error


class FakeApi:
    """In-memory fake for TodoApi.

    Stores predefined results per command and records all calls.
    """

    def __init__(self) -> None:
        self.responses: dict[str, Any] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def add_response(self, command: str, response: Any) -> None:
        self.responses[command] = response

    def call(self, command: str, args: dict[str, Any]) -> Any:
        self.calls.append((command, args))
        if command not in self.responses:
            msg = f"FakeApi: no response registered for {command!r}"
            raise KeyError(msg)
        return self.responses[command]
