"""Commands 'board' and 'show' of joinboard"""

from typing import Annotated

import typer

from joinboard.models import TaskType
from joinboard.utils.ui.console import get_console
from joinboard.utils.ui.formatters import (
    format_board,
    format_output,
    format_task_detail,
    render_task_card,
    task_to_dict,
)

from .decorators import command_wrapper, open_board_context

app = typer.Typer()
console = get_console()


@app.command("board")
@command_wrapper
async def board_command(
    search: Annotated[
        str | None, typer.Option("--search", "-s", help="Only tasks whose title or description matches")
    ] = None,
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format: pretty, json, yaml")
    ] = "pretty",
) -> None:
    """Show the kanban board."""
    async with open_board_context() as ctx:
        tasks = ctx.repository.search(search) if search else list(ctx.repository.tasks)

        if output in ("json", "yaml"):
            format_output([task_to_dict(task) for task in tasks], output)
            return

        columns: dict[TaskType, list] = {task_type: [] for task_type in TaskType}
        for task in tasks:
            columns[task.task_type].append(
                render_task_card(
                    task,
                    ctx.resolver.resolve(task),
                    ctx.resolver.overflow_count(task),
                )
            )
        format_board(columns)


@app.command("show")
@command_wrapper
async def show_command(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format: pretty, json, yaml")
    ] = "pretty",
) -> None:
    """Show a single task with its subtasks."""
    async with open_board_context() as ctx:
        task = ctx.repository.get(task_id)
        if output in ("json", "yaml"):
            format_output(task_to_dict(task), output)
            return
        format_task_detail(task, ctx.resolver.resolve(task), ctx.resolver.overflow_count(task))
        targets = ", ".join(
            f"{title} ({task_type.value})" for task_type, title in ctx.board.other_columns(task)
        )
        console.print(f"[dim]Move to: {targets}[/dim]")
