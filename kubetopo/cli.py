"""Command line access to the topology filter engine.

Reads a topology snapshot (YAML or JSON) holding ``nodes`` and, optionally,
``mode``, ``typeShapes``, ``activeFilters``, ``options`` and
``userIsFiltering``, and prints what the console's filter bar would show.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from kubetopo.constants.values import APP_TITLE, TYPE_FILTER_KEY
from kubetopo.filtering.engine import TopologyFilterEngine
from kubetopo.models.filters.filter_state import AllFiltersResult
from kubetopo.models.state.app_settings import ConfigLoadError, FilterSettings
from kubetopo.models.state.config_manager import ConfigManager
from kubetopo.utils.descriptions import get_node_description

logger = logging.getLogger(__name__)

app = typer.Typer(
    name=APP_TITLE,
    help="Inspect topology filters for a snapshot of graph nodes.",
    no_args_is_help=True,
)
console = Console()


@dataclass
class CliState:
    settings: FilterSettings
    engine: TopologyFilterEngine


@dataclass
class TopologySnapshot:
    """Parsed contents of a topology file."""

    nodes: list[dict[str, Any]]
    mode: str | None = None
    type_shapes: dict[str, Any] | None = None
    active_filters: dict[str, Any] | None = None
    options: dict[str, Any] | None = None
    user_is_filtering: bool = False


def load_snapshot(path: Path) -> TopologySnapshot:
    """Read a topology snapshot file.

    Raises:
        ValueError: If the file is not valid YAML/JSON or lacks a node list.
    """
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ValueError(f"Cannot read topology file {path}: {exc}") from exc

    if isinstance(raw, list):
        raw = {"nodes": raw}
    if not isinstance(raw, dict) or not isinstance(raw.get("nodes", []), list):
        raise ValueError(f"Topology file {path} must hold a 'nodes' list")

    return TopologySnapshot(
        nodes=[node for node in raw.get("nodes") or [] if isinstance(node, dict)],
        mode=raw.get("mode"),
        type_shapes=raw.get("typeShapes"),
        active_filters=raw.get("activeFilters"),
        options=raw.get("options"),
        user_is_filtering=bool(raw.get("userIsFiltering", False)),
    )


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


def _read_snapshot(path: Path) -> TopologySnapshot:
    try:
        return load_snapshot(path)
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _compute(
    state: CliState,
    snapshot: TopologySnapshot,
    mode: str | None,
    locale: str | None,
) -> AllFiltersResult:
    return state.engine.get_all_filters(
        mode or snapshot.mode,
        snapshot.type_shapes,
        True,
        snapshot.nodes,
        snapshot.options,
        snapshot.active_filters,
        user_is_filtering=snapshot.user_is_filtering,
        locale=locale,
    )


def _format_values(values: Any) -> str:
    if not values:
        return "-"
    if isinstance(values, dict):
        return ", ".join(f"{key} ({label})" for key, label in values.items())
    if isinstance(values, (set, frozenset)):
        return ", ".join(sorted(str(value) for value in values))
    return ", ".join(str(value) for value in values)


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Settings file (YAML)."
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Override the configured log level."
    ),
) -> None:
    """Load settings and configure logging for every command."""
    try:
        settings = ConfigManager.load(config)
    except ConfigLoadError as exc:
        console.print(f"[yellow]Warning:[/yellow] {escape(str(exc))}; using default settings")
        settings = FilterSettings()

    level = (log_level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = CliState(settings=settings, engine=TopologyFilterEngine(settings=settings))


@app.command("filters")
def show_filters(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Topology snapshot (YAML or JSON)."),
    mode: str | None = typer.Option(None, "--mode", "-m", help="View mode."),
    locale: str | None = typer.Option(None, "--locale", "-l"),
) -> None:
    """Show type chips, the active selection and each category's values."""
    snapshot = _read_snapshot(path)
    result = _compute(_state(ctx), snapshot, mode, locale)

    table = Table(title="Available filters")
    table.add_column("Category", style="cyan")
    table.add_column("Name")
    table.add_column("Available values")
    table.add_column("Active")

    available = result.available_filters
    table.add_row(
        TYPE_FILTER_KEY,
        "-",
        _format_values(available.types),
        _format_values(result.active_filters.get(TYPE_FILTER_KEY)),
    )
    for key, info in available.categories.items():
        table.add_row(
            key,
            info.name or "-",
            _format_values(info.available_set),
            _format_values(result.active_filters.get(key)),
        )
    console.print(table)

    if result.other_type_filters:
        console.print(f"Folded into other: {_format_values(result.other_type_filters)}")


@app.command("nodes")
def show_nodes(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Topology snapshot (YAML or JSON)."),
    mode: str | None = typer.Option(None, "--mode", "-m", help="View mode."),
    locale: str | None = typer.Option(None, "--locale", "-l"),
) -> None:
    """List the nodes that pass the snapshot's active filters."""
    state = _state(ctx)
    snapshot = _read_snapshot(path)
    result = _compute(state, snapshot, mode, locale)
    visible = state.engine.filter_nodes(
        mode or snapshot.mode,
        snapshot.nodes,
        result.active_filters,
        result.available_filters,
    )

    table = Table(title=f"Visible nodes ({len(visible)}/{len(snapshot.nodes)})")
    table.add_column("Type", style="cyan")
    table.add_column("Name")
    table.add_column("Namespace")
    for node in visible:
        table.add_row(
            str(node.get("type", "")),
            get_node_description(node, locale),
            str(node.get("namespace") or "-"),
        )
    console.print(table)


@app.command("search")
def show_search(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Topology snapshot (YAML or JSON)."),
    mode: str | None = typer.Option(None, "--mode", "-m", help="View mode."),
) -> None:
    """Show which active selections act as search seeds."""
    snapshot = _read_snapshot(path)
    split = _state(ctx).engine.get_search_filter(
        mode or snapshot.mode, snapshot.active_filters
    )

    table = Table(title="Search split")
    table.add_column("Category", style="cyan")
    table.add_column("Bag")
    table.add_column("Values")
    for key, value in split.filters.items():
        table.add_row(key, "filters", _format_values(value))
    for key, value in (split.search or {}).items():
        table.add_row(key, "search", _format_values(value))
    console.print(table)


if __name__ == "__main__":
    app()
