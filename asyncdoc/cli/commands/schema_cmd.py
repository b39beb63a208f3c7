"""Schema inspection command for asyncdoc CLI."""

from typing import Annotated

import typer
from rich.markup import escape

from asyncdoc.cli.utils import err_console, print_diagnostics, write_output
from asyncdoc.core.document import OUTPUT_FORMATS, render
from asyncdoc.core.exceptions import AsyncDocError
from asyncdoc.core.resolver import resolve
from asyncdoc.core.schema import SchemaBuilder, SchemaRegistry

app = typer.Typer()


@app.callback(invoke_without_command=True)
def schema(
    ctx: typer.Context,
    type_path: Annotated[
        str,
        typer.Argument(help="Payload type as module.Type or module:Type"),
    ],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (yaml, json)"),
    ] = "yaml",
) -> None:
    """Show the schema entries a single payload type expands to.

    Examples
    --------
    asyncdoc schema billing.events.Invoice
    asyncdoc schema --format json billing.events:Invoice
    """
    if ctx.invoked_subcommand is not None:
        return

    if output_format not in OUTPUT_FORMATS:
        err_console.print(
            f"[red]Error:[/red] Unknown format '{output_format}'. "
            f"Use one of: {', '.join(OUTPUT_FORMATS)}"
        )
        raise typer.Exit(1)

    builder = SchemaBuilder()
    registry = SchemaRegistry()
    try:
        builder.expand(resolve(type_path), registry)
    except AsyncDocError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    print_diagnostics(builder.diagnostics)
    write_output(render(registry.to_dict(), output_format), None)
