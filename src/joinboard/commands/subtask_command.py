"""Command group 'subtask' of joinboard"""

from typing import Annotated

import typer

from joinboard.utils.ui.formatters import format_success

from .decorators import command_wrapper, open_board_context

app = typer.Typer(help="Subtask commands", no_args_is_help=True)


@app.command("toggle")
@command_wrapper
async def toggle_command(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    index: Annotated[int, typer.Argument(help="Subtask number as shown by 'show'")],
) -> None:
    """Check or uncheck a subtask."""
    async with open_board_context() as ctx:
        task = ctx.repository.get(task_id)
        await ctx.subtasks.toggle(task, index)
        checked, total = ctx.subtasks.progress(task)

    state = "checked" if task.sub_tasks[index].is_checked else "unchecked"
    format_success(f"Subtask '{task.sub_tasks[index].text}' {state} ({checked}/{total} done)")


@app.command("delete")
@command_wrapper
async def delete_command(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    index: Annotated[int, typer.Argument(help="Subtask number as shown by 'show'")],
) -> None:
    """Remove a subtask."""
    async with open_board_context() as ctx:
        task = ctx.repository.get(task_id)
        text = task.sub_tasks[index].text if 0 <= index < len(task.sub_tasks) else ""
        await ctx.subtasks.delete_subtask(task, index)

    format_success(f"Subtask '{text}' deleted")
