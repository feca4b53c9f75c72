import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dagiter._errors import DagIterError
from dagiter._io import GraphDocument, export_visits, load_graph
from dagiter._modes import SiblingOrder, TraversalMode
from dagiter._traversal import build_graph, walk

from .config import DagIterConfig, get_config

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Dependency-ordered DAG traversal."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load(graph: Path) -> tuple[GraphDocument, DagIterConfig]:
    try:
        config = get_config()
        err_console.print(f"[cyan]Loading graph from:[/cyan] {graph}")
        document = load_graph(graph)
    except DagIterError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    return document, config


@app.command(name="walk")
def walk_command(  # noqa: PLR0913
    graph: Annotated[
        Path,
        typer.Argument(help="Path to a graph document (.toml or .json)"),
    ],
    *,
    mode: Annotated[
        TraversalMode | None,
        typer.Option("-m", "--mode", help="Traversal mode (defaults to [tool.dagiter].mode or dfs)"),
    ] = None,
    until: Annotated[
        str | None,
        typer.Option("--until", help="Stop after visiting this node"),
    ] = None,
    discovery: Annotated[
        bool,
        typer.Option("--discovery", help="Keep declaration order instead of child-count ordering"),
    ] = False,
    check_cycles: Annotated[
        bool | None,
        typer.Option(
            "--check-cycles/--no-check-cycles",
            help="Reject cyclic graphs before traversing (defaults to [tool.dagiter].check-cycles)",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Write the visit sequence to a TOML file"),
    ] = None,
) -> None:
    """Traverse a graph and print the visit sequence."""
    document, config = _load(graph)

    effective_mode = mode if mode is not None else config.mode
    sibling_order = SiblingOrder.DISCOVERY if discovery else config.sibling_order
    effective_check = check_cycles if check_cycles is not None else config.check_cycles
    logger.debug("Mode: %s, sibling order: %s, check cycles: %s", effective_mode, sibling_order, effective_check)

    try:
        visits = walk(
            document.to_nodes(),
            document.to_edges(),
            effective_mode,
            until,
            sibling_order=sibling_order,
            check_cycles=effective_check,
        )
    except DagIterError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Node", style="bold")
    table.add_column("Depth", justify="right", style="yellow")
    table.add_column("Parents")

    for visit in visits:
        table.add_row(
            str(visit.index),
            escape(visit.name),
            str(visit.depth),
            escape(", ".join(visit.parents)) or "[dim]-[/dim]",
        )

    out_console.print(table)
    err_console.print()
    err_console.print(f"[green]✓ Visited {len(visits)} of {len(document.nodes)} node(s)[/green]")

    if output is not None:
        export_visits(visits, output)
        err_console.print(f"[cyan]Exported visits to:[/cyan] {output}")


@app.command()
def check(
    graph: Annotated[
        Path,
        typer.Argument(help="Path to a graph document (.toml or .json)"),
    ],
) -> None:
    """Check a graph document without traversing it."""
    document, _ = _load(graph)
    nodes = document.to_nodes()

    err_console.print("[cyan]Validating nodes and edges...[/cyan]")
    try:
        index = build_graph(nodes, document.to_edges())
    except DagIterError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    starts = index.sources(node.name for node in nodes)
    isolated = [node.name for node in nodes if node.name not in index]
    cycle_members = index.cycle_members()

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Nodes", justify="right")
    table.add_column("Edges", justify="right")
    table.add_column("Start nodes", justify="right", style="green")
    table.add_column("Isolated", justify="right", style="yellow")
    table.add_row(str(len(nodes)), str(index.edge_count), str(len(starts)), str(len(isolated)))

    err_console.print(Panel(table, title=f"[bold]{escape(graph.name)}[/bold]", border_style="cyan"))

    if isolated:
        err_console.print(f"[yellow]⚠ Never visited (no edges): {escape(', '.join(isolated))}[/yellow]")

    if cycle_members:
        err_console.print(f"[red]✗ Cycle detected among: {escape(', '.join(cycle_members))}[/red]")
        raise typer.Exit(code=1)

    order = index.topological_order(node.name for node in nodes if node.name in index)
    out_console.print(f"[bold]Dependency order:[/bold] {escape(' → '.join(order))}")
    err_console.print("[green]✓ Graph is a valid DAG[/green]")


def main() -> None:
    app()
