"""Command 'summary' of joinboard"""

from typing import Annotated

import typer

from joinboard.utils.ui.formatters import format_output, format_summary

from .decorators import command_wrapper, open_board_context
from .utils import parse_day

app = typer.Typer()


@app.command("summary")
@command_wrapper
async def summary_command(
    today: Annotated[
        str | None, typer.Option("--today", help="Reference day (YYYY-MM-DD) for due-today figures")
    ] = None,
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format: pretty, json, yaml")
    ] = "pretty",
) -> None:
    """Show task counts per column and urgent deadlines."""
    day = parse_day(today) if today else None
    async with open_board_context() as ctx:
        summary = ctx.summary.overview(day)
    if output in ("json", "yaml"):
        format_output(summary.model_dump(mode="json"), output)
    else:
        format_summary(summary)
