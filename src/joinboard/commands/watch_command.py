"""Command 'watch' of joinboard"""

import asyncio
from contextlib import suppress
from datetime import datetime
from typing import Annotated

import typer

from joinboard.models import Task
from joinboard.utils.ui.console import get_console
from joinboard.utils.ui.formatters import format_summary

from .decorators import command_wrapper, open_board_context

app = typer.Typer()
console = get_console()


@app.command("watch")
@command_wrapper
async def watch_command(
    snapshots: Annotated[
        int | None,
        typer.Option("--snapshots", "-n", min=1, help="Stop after this many snapshots"),
    ] = None,
) -> None:
    """Follow the live query and print the summary after every change."""
    ctx = open_board_context()
    done = asyncio.Event()

    def on_snapshot(tasks: tuple[Task, ...]) -> None:
        console.print(
            f"[dim]{datetime.now():%H:%M:%S}[/dim] snapshot "
            f"[cyan]{ctx.engine.snapshot_count}[/cyan]: {len(tasks)} tasks"
        )
        format_summary(ctx.summary.overview())
        if snapshots is not None and ctx.engine.snapshot_count >= snapshots:
            done.set()

    ctx.engine.add_listener(on_snapshot)
    try:
        await ctx.start(live=True)
        while not done.is_set() and ctx.engine.is_subscribed:
            with suppress(TimeoutError):
                await asyncio.wait_for(done.wait(), timeout=0.5)
    finally:
        ctx.engine.remove_listener(on_snapshot)
        await ctx.close()

    if not done.is_set():
        console.print("[yellow]Live query ended[/yellow]")
