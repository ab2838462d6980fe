"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

from tree_reorder.models.node import Node

# 1
# ├── 2
# │   └── 4
# └── 3
SMALL_TREE = [
    Node(id=1, parent_id=None, order_key=10.0, title="Plan trip"),
    Node(id=2, parent_id=1, order_key=10.0, title="Book flights"),
    Node(id=3, parent_id=1, order_key=20.0, title="Pack"),
    Node(id=4, parent_id=2, order_key=10.0, title="Compare prices"),
]

# a
# ├── b
# │   └── c
# │       └── d
# e
# f
# └── g
DEEP_TREE = [
    Node(id="a", parent_id=None, order_key=10.0, title="A"),
    Node(id="b", parent_id="a", order_key=10.0, title="B"),
    Node(id="c", parent_id="b", order_key=10.0, title="C"),
    Node(id="d", parent_id="c", order_key=10.0, title="D"),
    Node(id="e", parent_id=None, order_key=20.0, title="E"),
    Node(id="f", parent_id=None, order_key=30.0, title="F"),
    Node(id="g", parent_id="f", order_key=10.0, title="G"),
]

# 1
# 2   (parent 99 is not in the list)
ORPHAN_TREE = [
    Node(id=1, parent_id=None, order_key=10.0, title="Inbox"),
    Node(id=2, parent_id=99, order_key=20.0, title="Left behind"),
]


@pytest.fixture
def small_tree() -> list[Node]:
    return list(SMALL_TREE)


@pytest.fixture
def deep_tree() -> list[Node]:
    return list(DEEP_TREE)


@pytest.fixture
def orphan_tree() -> list[Node]:
    return list(ORPHAN_TREE)


@pytest.fixture
def nodes_file(tmp_path: Path) -> Path:
    """Write SMALL_TREE to a JSON node file."""
    path = tmp_path / "nodes.json"
    path.write_text(
        json.dumps(
            [
                {"id": n.id, "parent_id": n.parent_id, "order_key": n.order_key, "title": n.title}
                for n in SMALL_TREE
            ]
        )
    )
    return path
