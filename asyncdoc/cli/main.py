"""asyncdoc CLI - Main entrypoint."""

import typer
from rich.console import Console

from asyncdoc import __version__
from asyncdoc.cli.commands import config_cmd, generate_cmd, schema_cmd
from asyncdoc.core.logging import configure_logging

app = typer.Typer(
    name="asyncdoc",
    help="asyncdoc - Generate AsyncAPI documents from message payload types.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

console = Console()

app.add_typer(generate_cmd.app, name="generate", help="Generate an AsyncAPI document")
app.add_typer(schema_cmd.app, name="schema", help="Show the schemas of a single payload type")
app.add_typer(config_cmd.app, name="config", help="Configuration commands")


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    *,
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only log errors"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable debug logging"),
    log_format: str = typer.Option(
        "structured", "--log-format", help="Log format: console|structured|json|rich"
    ),
    version: bool = typer.Option(False, "--version", "-v", help="Show version and exit"),
) -> None:
    """asyncdoc CLI - AsyncAPI documentation from code.

    Global flags are parsed here and stored on `ctx.obj` for subcommands.
    """
    if ctx.obj is None:
        ctx.obj = {}

    level = "WARNING"
    if quiet:
        level = "ERROR"
    elif verbose:
        level = "DEBUG"

    ctx.obj.update({"quiet": quiet, "verbose": verbose, "log_level": level})
    configure_logging(level=level, format=log_format)  # type: ignore[arg-type]

    if version:
        console.print(f"[bold blue]asyncdoc[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
