"""Read and write node lists as JSON."""

import json
from pathlib import Path
from typing import Any

from tree_reorder.models.node import Node


def parse_node(raw: dict[str, Any]) -> Node:
    """Build a Node from a JSON object (``order_key`` and ``parent_id`` may be null)."""
    order_key = raw.get("order_key")
    return Node(
        id=raw["id"],
        parent_id=raw.get("parent_id"),
        order_key=float(order_key) if order_key is not None else None,
        title=raw.get("title", ""),
        completed=bool(raw.get("completed", False)),
    )


def node_to_dict(node: Node) -> dict[str, Any]:
    return {
        "id": node.id,
        "parent_id": node.parent_id,
        "order_key": node.order_key,
        "title": node.title,
        "completed": node.completed,
    }


def load_nodes(path: Path) -> list[Node]:
    """Load a JSON array of node objects.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not a JSON array, or an id repeats.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        msg = f"Expected a JSON array of nodes in {path}"
        raise ValueError(msg)

    nodes = [parse_node(raw) for raw in data]
    seen: set[Any] = set()
    duplicates: set[str] = set()
    for node in nodes:
        if node.id in seen:
            duplicates.add(str(node.id))
        seen.add(node.id)
    if duplicates:
        msg = f"Duplicate node ids in {path}: {sorted(duplicates)!r}"
        raise ValueError(msg)
    return nodes


def save_nodes(path: Path, nodes: list[Node]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [node_to_dict(n) for n in nodes]
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
