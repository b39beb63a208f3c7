"""Generate command for asyncdoc CLI."""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from asyncdoc.api import build_document
from asyncdoc.cli.utils import (
    err_console,
    load_config_or_exit,
    parse_bindings,
    print_diagnostics,
    write_output,
)
from asyncdoc.core.document import OUTPUT_FORMATS, render
from asyncdoc.core.exceptions import AsyncDocError
from asyncdoc.core.logging import get_logger
from asyncdoc.core.resolver import resolve_bindings

app = typer.Typer()
logger = get_logger(__name__)


@app.callback(invoke_without_command=True)
def generate(
    ctx: typer.Context,
    senders: Annotated[
        list[str] | None,
        typer.Option(
            "--sender",
            "-s",
            help="Produced topic as CHANNEL=module.Type (repeatable)",
        ),
    ] = None,
    receivers: Annotated[
        list[str] | None,
        typer.Option(
            "--receiver",
            "-r",
            help="Consumed topic as CHANNEL=module.Type (repeatable)",
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to asyncdoc.toml or pyproject.toml"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the document here instead of stdout"),
    ] = None,
    output_format: Annotated[
        str | None,
        typer.Option("--format", "-f", help="Output format (yaml, json)"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail when two payload types share a schema name"),
    ] = False,
) -> None:
    """Generate an AsyncAPI document from payload types.

    Examples
    --------
    asyncdoc generate --sender invoices=billing.events.Invoice
    asyncdoc generate --config asyncdoc.toml --output docs/asyncapi.yaml
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = load_config_or_exit(config)

    fmt = output_format or settings.output_format
    if fmt not in OUTPUT_FORMATS:
        err_console.print(
            f"[red]Error:[/red] Unknown format '{fmt}'. Use one of: {', '.join(OUTPUT_FORMATS)}"
        )
        raise typer.Exit(1)

    sender_paths = {**settings.senders, **parse_bindings(senders)}
    receiver_paths = {**settings.receivers, **parse_bindings(receivers)}
    if not sender_paths and not receiver_paths:
        err_console.print(
            "[yellow]No senders or receivers configured; document will be empty[/yellow]"
        )

    try:
        result = build_document(
            resolve_bindings(sender_paths),
            resolve_bindings(receiver_paths),
            info=settings.info,
            strict=strict or settings.strict,
        )
    except AsyncDocError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    logger.info(
        "Generated document with {count} schemas", count=len(result.document.schemas)
    )
    print_diagnostics(result.diagnostics)

    target = output or (Path(settings.output) if settings.output else None)
    write_output(render(result.to_dict(), fmt), target)
