"""CLI interface for modulegraph using Typer framework."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from modulegraph import __description__, __version__
from modulegraph.config import CONFIG_FILE_NAME, LogLevel, find_config_file, load_config
from modulegraph.errors import ModuleGraphError
from modulegraph.pipeline import create_module_graph

app = typer.Typer(
    name="modulegraph",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

_LOG_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


def setup_logging(level: LogLevel = LogLevel.INFO) -> None:
    """Route modulegraph logging through rich at the configured level."""
    handler = RichHandler(console=console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger = logging.getLogger("modulegraph")
    package_logger.handlers = [handler]
    package_logger.setLevel(_LOG_LEVELS[LogLevel(level)])
    package_logger.propagate = False


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"modulegraph version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """modulegraph - Mermaid diagrams of multi-module build dependencies."""


@app.command()
def create(
    project_dir: Annotated[
        Path,
        typer.Option("--project-dir", "-p", help="Root of the multi-module build (default: current)")
    ] = Path("."),
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .modulegraph.json)")
    ] = None,
) -> None:
    """Generate the module dependency diagram and write it into the configured document."""
    try:
        project_dir = project_dir.resolve()
        config_file = config.resolve() if config else find_config_file(project_dir)
        if config_file is None:
            config_file = project_dir / CONFIG_FILE_NAME
        module_graph_config = load_config(config_file)
        setup_logging(module_graph_config.logging.level)

        config_dir = config_file.parent
        result = create_module_graph(module_graph_config, project_dir, config_dir=config_dir)
    except (ModuleGraphError, FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(
        f"[green]OK[/green] Graph with {len(result.graph.modules)} modules "
        f"and {len(result.graph.edges)} edges"
    )
    if result.created:
        console.print(f"[green]Created:[/green] {result.target}")
    elif result.changed:
        console.print(f"[green]Updated:[/green] {result.target}")
    else:
        console.print(f"[dim]Up to date:[/dim] {result.target}")


if __name__ == "__main__":
    app()
