"""Configuration commands for asyncdoc CLI."""

from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich.console import Console

from asyncdoc.cli.utils import load_config_or_exit

app = typer.Typer(help="Configuration commands")
console = Console()


@app.command("show")
def show_config(
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to asyncdoc.toml or pyproject.toml"),
    ] = None,
    key: Annotated[
        str | None,
        typer.Argument(help="Show only this key (e.g. senders, logging)"),
    ] = None,
) -> None:
    """Show the effective configuration or a single key."""
    settings = load_config_or_exit(config).to_dict()
    if key:
        if key not in settings:
            console.print(f"[red]Unknown key '{key}'[/red]. Available: {', '.join(settings)}")
            raise typer.Exit(1)
        settings = {key: settings[key]}
    typer.echo(yaml.safe_dump(settings, sort_keys=False, default_flow_style=False), nl=False)
