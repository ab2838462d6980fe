"""CLI for inspecting outlines and trying drops against a node file."""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from tree_reorder.config import INDENTATION_WIDTH, resolve_nodes_file
from tree_reorder.core.drag.session import ReorderSession
from tree_reorder.core.store.json_file import load_nodes, save_nodes
from tree_reorder.core.store.memory import InMemoryNodeStore
from tree_reorder.core.tree.flatten import children_by_parent, count_descendants
from tree_reorder.core.tree.visibility import collapsed_ids
from tree_reorder.errors import CyclicMoveError, NodeNotFoundError
from tree_reorder.logging_config import configure_logging
from tree_reorder.models.node import DropRejected, FlattenedItem, Node, NodeId

app = typer.Typer(help="Flatten, project and reorder hierarchical lists.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def parse_id(raw: str) -> NodeId:
    """Numeric ids on the command line refer to integer node ids."""
    try:
        return int(raw)
    except ValueError:
        return raw


def _load(path: Path | None) -> tuple[Path, list[Node]]:
    src = path or resolve_nodes_file()
    if not src.exists():
        logger.error("Node file not found: {}", src)
        raise typer.Exit(1)
    try:
        return src, load_nodes(src)
    except (ValueError, KeyError) as e:
        logger.error("Cannot read nodes from {}: {}", src, e)
        raise typer.Exit(1) from e


def _render(items: list[FlattenedItem], nodes: list[Node], collapsed: frozenset[NodeId]) -> None:
    groups = children_by_parent(nodes)
    for item in items:
        has_children = bool(groups.get(item.id))
        marker = "+" if has_children and item.id in collapsed else "-"
        check = "[x] " if item.node.completed else ""
        typer.echo(f"{'  ' * item.depth}{marker} {check}{item.node.title}  [id={item.id}]")


@app.command()
def show(
    path: Annotated[Path | None, typer.Argument(help="JSON node file")] = None,
    collapse: Annotated[
        list[str] | None,
        typer.Option("--collapse", "-c", help="Hide the children of this node id"),
    ] = None,
    fold: bool = typer.Option(False, "--fold", help="Collapse every node that has children"),
    expand: Annotated[
        list[str] | None,
        typer.Option("--expand", "-e", help="Keep this node open when folding"),
    ] = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Print the visible outline."""
    _src, nodes = _load(path)
    collapsed = {parse_id(c) for c in collapse or []}
    if fold:
        collapsed |= collapsed_ids(nodes, {parse_id(e) for e in expand or []})
    session = ReorderSession(InMemoryNodeStore(nodes), nodes, collapsed=collapsed)
    items = session.visible_items()

    if output_json:
        data = [
            {"id": i.id, "parent_id": i.parent_id, "depth": i.depth, "index": i.index}
            for i in items
        ]
        typer.echo(json.dumps(data, indent=2))
    else:
        _render(items, nodes, session.collapsed)


@app.command()
def move(
    active: str = typer.Argument(..., help="Id of the dragged node"),
    over: str = typer.Argument(..., help="Id of the node it is dropped on"),
    path: Annotated[Path | None, typer.Option("--file", "-f", help="JSON node file")] = None,
    offset: float = typer.Option(0.0, "--offset", "-o", help="Horizontal drag offset in pixels"),
    indent: float = typer.Option(INDENTATION_WIDTH, "--indent", help="Pixels per nesting level"),
    collapse: Annotated[
        list[str] | None,
        typer.Option("--collapse", "-c", help="Hide the children of this node id"),
    ] = None,
    write: bool = typer.Option(False, "--write", "-w", help="Save the reordered nodes"),
) -> None:
    """Simulate dragging ACTIVE onto OVER and apply the resulting move."""
    src, nodes = _load(path)
    store = InMemoryNodeStore(nodes)
    session = ReorderSession(
        store, store.nodes, collapsed=map(parse_id, collapse or []), indentation_width=indent
    )
    store.subscribe(session.update_nodes)

    active_id, over_id = parse_id(active), parse_id(over)
    session.on_drag_start(active_id)
    nested = count_descendants(store.nodes, active_id)
    typer.echo(f"Dragging {active_id} with {nested} nested items")
    session.on_drag_over(over_id)
    session.on_drag_move(offset)

    projection = session.projection
    if projection is not None:
        typer.echo(
            f"Projected depth {projection.depth} under {projection.parent_id} "
            f"(allowed {projection.min_depth}..{projection.max_depth})"
        )

    try:
        result = asyncio.run(session.on_drag_end(over_id))
    except (NodeNotFoundError, CyclicMoveError) as e:
        logger.error("Store refused the move: {}", e)
        raise typer.Exit(1) from e
    if isinstance(result, DropRejected):
        typer.echo(f"Drop rejected: {result.reason}")
        raise typer.Exit(1)

    typer.echo(
        f"Moved {result.active_id} under {result.parent_id} "
        f"(after {result.after_id}, before {result.before_id})"
    )
    _render(session.visible_items(), list(store.nodes), session.collapsed)

    if write:
        save_nodes(src, list(store.nodes))
        logger.info("Saved {} nodes to {}", len(store.nodes), src)
