"""Output formatters for different formats."""

import json
from datetime import datetime
from typing import Any

import yaml
from rich.columns import Columns
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from joinboard.models import BoardSummary, Contact, Priority, Task, TaskType
from joinboard.services.board_service import COLUMN_TITLES
from joinboard.utils.ui.console import get_console

console = get_console()

PRIORITY_STYLES = {
    Priority.URGENT: "bold red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "green",
    Priority.NONE: "dim",
}


def task_to_dict(task: Task) -> dict[str, Any]:
    """Plain representation of a task for json/yaml output."""
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "category": task.category,
        "due_date": task.due_date.isoformat(),
        "priority": task.priority.value,
        "task_type": task.task_type.value,
        "sub_tasks": [
            {"text": s.text, "is_checked": s.is_checked} for s in task.sub_tasks
        ],
        "assigned_to": [a.contact_id for a in task.assigned_to],
    }


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display plain data as json, yaml or a table."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        format_table(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())
    for item in items:
        table.add_row(*(_cell(item.get(col, "")) for col in columns))
    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))
    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_due_date(value: datetime) -> str:
    """Format a due date as 'Month Day, Year'."""
    return f"{value:%B} {value.day}, {value.year}"


def get_progress_bar(checked: int, total: int, width: int = 10) -> str:
    """Render subtask progress as a fixed-width bar."""
    if total <= 0:
        return ""
    filled = round(width * checked / total)
    return "█" * filled + "░" * (width - filled) + f" {checked}/{total}"


def initials(name: str) -> str:
    """Contact initials for the assignee badges."""
    parts = [p for p in name.split() if p]
    if not parts:
        return "?"
    if len(parts) == 1:
        return parts[0][0].upper()
    return (parts[0][0] + parts[-1][0]).upper()


def render_task_card(
    task: Task,
    assignees: list[Contact] | None = None,
    overflow: int = 0,
) -> Panel:
    """Render a board card for a task."""
    body = Text()
    if task.category:
        body.append(f"{task.category}\n", style="bold cyan")
    body.append(f"{task.title or '[untitled]'}\n", style="bold")
    if task.description:
        body.append(f"{task.description}\n", style="dim")

    checked = sum(1 for s in task.sub_tasks if s.is_checked)
    progress = get_progress_bar(checked, len(task.sub_tasks))
    if progress:
        body.append(f"{progress}\n")

    badges = " ".join(initials(c.name) for c in assignees or [])
    if overflow:
        badges = f"{badges} +{overflow}".strip()
    if badges:
        body.append(badges, style="magenta")
    body.append(f"\n{task.priority.value or '-'}", style=PRIORITY_STYLES[task.priority])

    return Panel(body, subtitle=task.id or "", width=32)


def format_board(columns: dict[TaskType, list[Panel]]) -> None:
    """Display the board as four side-by-side columns of cards."""
    rendered = []
    for task_type, title in COLUMN_TITLES.items():
        cards = columns.get(task_type, [])
        header = Text(f"{title} ({len(cards)})", style="bold underline")
        column = Table.grid()
        column.add_row(header)
        if not cards:
            column.add_row(Text("No tasks", style="dim"))
        for card in cards:
            column.add_row(card)
        rendered.append(column)
    console.print(Columns(rendered, equal=True, expand=True))


def format_summary(summary: BoardSummary) -> None:
    """Display the summary page figures."""
    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="bold white", justify="right")
    table.add_row("To-Do", str(summary.to_do))
    table.add_row("Done", str(summary.done))
    table.add_row("Urgent", str(summary.urgent))
    table.add_row("Urgent due today", str(summary.urgent_due_today))
    table.add_row("Tasks in Board", str(summary.total))
    table.add_row("Tasks In Progress", str(summary.in_progress))
    table.add_row("Awaiting Feedback", str(summary.feedback))
    deadline = summary.next_urgent_deadline
    table.add_row("Upcoming Deadline", format_due_date(deadline) if deadline else "-")
    console.print(table)


def format_task_detail(task: Task, assignees: list[Contact], overflow: int = 0) -> None:
    """Display every field of a task, with numbered subtasks."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Id", task.id or "-")
    table.add_row("Title", task.title)
    table.add_row("Description", task.description or "-")
    table.add_row("Category", task.category or "-")
    table.add_row("Due date", format_due_date(task.due_date))
    table.add_row(
        "Priority",
        Text(task.priority.value or "-", style=PRIORITY_STYLES[task.priority]),
    )
    table.add_row("Column", COLUMN_TITLES[task.task_type])
    names = ", ".join(c.name for c in assignees) or "-"
    if overflow:
        names += f" (+{overflow})"
    table.add_row("Assigned to", names)
    console.print(table)

    if task.sub_tasks:
        console.print("[bold]Subtasks[/bold]")
        for index, sub_task in enumerate(task.sub_tasks):
            mark = "☑" if sub_task.is_checked else "☐"
            console.print(f"  {index}. {mark} {escape(sub_task.text)}")

