"""Commands 'add', 'move' and 'delete' of joinboard"""

from typing import Annotated

import typer

from joinboard.exceptions import TaskValidationError
from joinboard.models import AssignedContact, Priority, SubTask, Task
from joinboard.services.board_service import COLUMN_TITLES, parse_task_type
from joinboard.utils.ui.console import get_console
from joinboard.utils.ui.formatters import format_success, format_warning

from .decorators import command_wrapper, open_board_context
from .utils import parse_due_date

app = typer.Typer()
console = get_console()


def _parse_priority(value: str) -> Priority:
    try:
        return Priority(value)
    except ValueError as e:
        raise TaskValidationError(
            f"Unknown priority '{value}'. Use one of: low, medium, urgent"
        ) from e


@app.command("add")
@command_wrapper
async def add_command(
    title: Annotated[str, typer.Argument(help="Task title")],
    description: Annotated[
        str, typer.Option("--description", "-d", help="Task description")
    ] = "",
    category: Annotated[
        str, typer.Option("--category", "-c", help="Category, e.g. 'User Story'")
    ] = "",
    due: Annotated[
        str | None, typer.Option("--due", help="Due date (ISO format, default: now)")
    ] = None,
    priority: Annotated[
        str, typer.Option("--priority", "-p", help="low, medium or urgent")
    ] = "medium",
    column: Annotated[
        str, typer.Option("--column", help="toDo, inProgress, feedback or done")
    ] = "toDo",
    subtasks: Annotated[
        list[str] | None, typer.Option("--subtask", help="Subtask text (repeatable)")
    ] = None,
    assignees: Annotated[
        list[str] | None, typer.Option("--assign", "-a", help="Contact ID (repeatable)")
    ] = None,
) -> None:
    """Create a task."""
    if not title.strip():
        raise TaskValidationError("Title cannot be empty")

    task = Task(
        title=title,
        description=description,
        category=category,
        due_date=parse_due_date(due),
        priority=_parse_priority(priority),
        task_type=parse_task_type(column),
        sub_tasks=[SubTask(text=text) for text in subtasks or []],
        assigned_to=[AssignedContact(contact_id=cid) for cid in assignees or []],
    )

    async with open_board_context() as ctx:
        unknown = [a.contact_id for a in task.assigned_to if not ctx.resolver.exists(a.contact_id)]
        if unknown:
            format_warning(f"Unknown contacts: {', '.join(unknown)}")
        task_id = await ctx.repository.add(task)

    format_success(f"Created task {task_id}")


@app.command("move")
@command_wrapper
async def move_command(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    column: Annotated[
        str, typer.Argument(help="Target column: toDo, inProgress, feedback or done")
    ],
) -> None:
    """Move a task to another board column."""
    async with open_board_context() as ctx:
        task = await ctx.board.move_by_id(task_id, column)

    format_success(f"Moved '{task.title}' to {COLUMN_TITLES[task.task_type]}")


@app.command("delete")
@command_wrapper
async def delete_command(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Delete a task from the board."""
    if not yes and not typer.confirm(f"Delete task {task_id}?"):
        console.print("[dim]Cancelled[/dim]")
        raise typer.Exit(0)

    async with open_board_context() as ctx:
        if ctx.repository.find_index_by_id(task_id) == -1:
            format_warning(f"Task {task_id} is not on the board")
        await ctx.repository.delete(task_id)

    format_success("Deleted from board")
