"""Node store backed by the remote todo command API."""

import asyncio
from typing import Any

from loguru import logger

from tree_reorder.models.node import Node, NodeId
from tree_reorder.protocols import ApiProtocol


def todo_to_node(raw: dict[str, Any]) -> Node:
    """Convert a todo record (``parent_id``, ``order_index``) into a Node."""
    order_index = raw.get("order_index")
    return Node(
        id=raw["id"],
        parent_id=raw.get("parent_id"),
        order_key=float(order_index) if order_index is not None else None,
        title=raw.get("title", ""),
        completed=bool(raw.get("completed", False)),
    )


class RemoteNodeStore:
    """Reads and reorders todos through an ``ApiProtocol`` client.

    The client is blocking, so commands run in a worker thread.
    """

    def __init__(self, api: ApiProtocol) -> None:
        self.api = api

    def list_nodes(self) -> list[Node]:
        todos = self.api.call("list_todos", {})
        return [todo_to_node(t) for t in todos or []]

    async def fetch_nodes(self) -> list[Node]:
        return await asyncio.to_thread(self.list_nodes)

    async def reorder(
        self,
        node_id: NodeId,
        before_id: NodeId | None,
        after_id: NodeId | None,
        parent_id: NodeId | None,
    ) -> None:
        # The backend names anchors by list position: beforeId is the sibling above.
        args = {
            "id": node_id,
            "beforeId": after_id,
            "afterId": before_id,
            "newParentId": parent_id,
        }
        logger.debug("Sending reorder_todo {}", args)
        await asyncio.to_thread(self.api.call, "reorder_todo", args)
