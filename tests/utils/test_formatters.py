"""Tests for the rich output formatters."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest
import yaml
from rich.console import Console

from joinboard.models import AssignedContact, Contact, Priority, SubTask, Task, TaskType
from joinboard.utils.ui import formatters
from joinboard.utils.ui.formatters import (
    format_due_date,
    format_output,
    get_progress_bar,
    initials,
    render_task_card,
    task_to_dict,
)


@pytest.fixture()
def task():
    return Task(
        id="t1",
        title="Build login page",
        category="User Story",
        due_date=datetime(2025, 3, 10, tzinfo=UTC),
        priority=Priority.URGENT,
        task_type=TaskType.IN_PROGRESS,
        sub_tasks=[SubTask(text="a", is_checked=True), SubTask(text="b")],
        assigned_to=[AssignedContact(contact_id="c1")],
    )


def _render(renderable) -> str:
    console = Console(width=60, record=True)
    with console.capture():
        console.print(renderable)
    return console.export_text()


# ---------------------------------------------------------------------------
# Plain helpers
# ---------------------------------------------------------------------------


def test_format_due_date():
    assert format_due_date(datetime(2025, 3, 5, tzinfo=UTC)) == "March 5, 2025"


@pytest.mark.parametrize(
    "checked, total, expected",
    [(1, 2, "█████░░░░░ 1/2"), (0, 3, "░░░░░░░░░░ 0/3"), (0, 0, "")],
)
def test_progress_bar(checked, total, expected):
    assert get_progress_bar(checked, total) == expected


@pytest.mark.parametrize(
    "name, expected",
    [("Anna Schmidt", "AS"), ("anna maria schmidt", "AS"), ("Zoe", "Z"), ("", "?")],
)
def test_initials(name, expected):
    assert initials(name) == expected


def test_task_to_dict(task):
    data = task_to_dict(task)

    assert data["priority"] == "urgent"
    assert data["task_type"] == "inProgress"
    assert data["due_date"] == "2025-03-10T00:00:00+00:00"
    assert data["assigned_to"] == ["c1"]


# ---------------------------------------------------------------------------
# Output formats
# ---------------------------------------------------------------------------


def test_format_output_json(task, capsys):
    format_output([task_to_dict(task)], "json")
    assert json.loads(capsys.readouterr().out)[0]["id"] == "t1"


def test_format_output_yaml(task, capsys):
    format_output(task_to_dict(task), "yaml")
    assert yaml.safe_load(capsys.readouterr().out)["title"] == "Build login page"


def test_format_output_table_empty(capsys):
    format_output([], "pretty")
    assert "No data to display" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Cards
# ---------------------------------------------------------------------------


def test_render_task_card(task):
    text = _render(render_task_card(task, [Contact(id="c1", name="Anna Schmidt")], overflow=2))

    assert "User Story" in text
    assert "Build login page" in text
    assert "1/2" in text
    assert "AS +2" in text
    assert "urgent" in text


def test_render_task_card_without_extras():
    text = _render(render_task_card(Task(id="t2", title="Bare")))

    assert "Bare" in text
    assert "t2" in text


def test_error_messages_use_prefix(capsys):
    formatters.format_error("boom")
    assert "Error: boom" in capsys.readouterr().out
