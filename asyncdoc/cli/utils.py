"""Shared helpers for asyncdoc CLI commands."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from asyncdoc.core.config import AsyncDocConfig, load_config
from asyncdoc.core.exceptions import AsyncDocError
from asyncdoc.core.schema import Diagnostic

err_console = Console(stderr=True)


def parse_binding(value: str) -> tuple[str, str]:
    """Split ``CHANNEL=module.Type`` into its two parts.

    Examples
    --------
    >>> parse_binding("invoices=billing.events.Invoice")
    ('invoices', 'billing.events.Invoice')
    """
    channel, sep, path = value.partition("=")
    channel, path = channel.strip(), path.strip()
    if not sep or not channel or not path:
        raise typer.BadParameter(f"Expected CHANNEL=module.Type, got '{value}'")
    return channel, path


def parse_bindings(values: list[str] | None) -> dict[str, str]:
    return dict(parse_binding(value) for value in values or [])


def load_config_or_exit(path: Path | None) -> AsyncDocConfig:
    """Load configuration, turning failures into a clean exit."""
    try:
        return load_config(path)
    except FileNotFoundError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except AsyncDocError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e


def print_diagnostics(diagnostics: list[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        err_console.print(
            f"[yellow]Warning ({diagnostic.kind}):[/yellow] {escape(diagnostic.message)}"
        )


def write_output(text: str, output: Path | None) -> None:
    """Write to ``output`` (creating parent directories) or stdout."""
    if output is None:
        typer.echo(text, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text)
    err_console.print(f"[green]✓[/green] Wrote {output}")
