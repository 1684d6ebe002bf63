"""Main entry point for joinboard."""

import typer

from joinboard import __version__
from joinboard.commands import (
    board_command,
    config_command,
    subtask_command,
    summary_command,
    task_commands,
    watch_command,
)
from joinboard.services.config_service import get_config_service
from joinboard.utils.typer_helpers import SuggestingGroup
from joinboard.utils.ui.console import get_console

app = typer.Typer(
    name="joinboard",
    cls=SuggestingGroup,
    help="Kanban task board kept in sync with a shared document store",
    no_args_is_help=True,
)

console = get_console()

# Top-level board commands
app.command("board")(board_command.board_command)
app.command("show")(board_command.show_command)
app.command("summary")(summary_command.summary_command)
app.command("add")(task_commands.add_command)
app.command("move")(task_commands.move_command)
app.command("delete")(task_commands.delete_command)
app.command("watch")(watch_command.watch_command)

app.add_typer(subtask_command.app, name="subtask", help="Subtask commands")
app.add_typer(config_command.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information and the configured backend."""
    config = get_config_service().config
    console.print(f"[bold]joinboard[/bold] version [cyan]{__version__}[/cyan]")
    if config.store.backend == "memory":
        console.print("[dim]Backend: in-memory store[/dim]")
    else:
        console.print(f"[dim]Backend: {config.api.endpoint}[/dim]")


if __name__ == "__main__":
    app()
