"""Configuration constants for tree-reorder."""

import os
from pathlib import Path

# Horizontal pointer travel (in pixels) that corresponds to one nesting level.
INDENTATION_WIDTH: int = 32

# Order keys are spread this far apart when appended or rebalanced.
ORDER_KEY_INTERVAL: float = 10.0

# Below this magnitude a sibling group is renumbered.
ORDER_KEY_MIN_GAP: float = 1e-5

LOG_FORMAT: str = "{level.icon} {message}"

# Remote store endpoint.
API_BASE_URL: str = os.environ.get("TREE_REORDER_API_URL", "http://127.0.0.1:8765")

# Seconds before a remote call is abandoned.
API_TIMEOUT: float = 10.0

# Node files for the CLI. First file found is used.
DATA_FILES: list[Path] = [
    Path("~/.local/share/tree-reorder/nodes.json").expanduser(),
    Path("~/.config/tree-reorder/nodes.json").expanduser(),
    Path("nodes.json"),
]


def resolve_nodes_file() -> Path:
    """Return the first existing node file, or the first candidate if none exist."""
    for candidate in DATA_FILES:
        if candidate.is_file():
            return candidate
    return DATA_FILES[0]
