"""Unit tests for the 'board', 'show' and 'summary' commands."""

from __future__ import annotations

import json

import pytest
import yaml
from typer.testing import CliRunner

from joinboard.main import app

runner = CliRunner()

pytestmark = pytest.mark.usefixtures("patch_board")


# ---------------------------------------------------------------------------
# board
# ---------------------------------------------------------------------------


def test_board_shows_columns_and_cards():
    result = runner.invoke(app, ["board"])

    assert result.exit_code == 0, result.output
    assert "To do (1)" in result.output
    assert "In progress (0)" in result.output
    assert "Done (1)" in result.output
    assert "Build login page" in result.output
    assert "Write docs" in result.output


def test_board_json_output():
    result = runner.invoke(app, ["board", "--output", "json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    # Ordered by priority: "low" sorts before "urgent"
    assert [t["id"] for t in data] == ["t2", "t1"]
    assert data[1]["assigned_to"] == ["c1", "c9"]


def test_board_search():
    result = runner.invoke(app, ["board", "--search", "OAUTH", "-o", "json"])

    assert result.exit_code == 0, result.output
    assert [t["id"] for t in json.loads(result.output)] == ["t1"]


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------


def test_show_task_detail():
    result = runner.invoke(app, ["show", "t1"])

    assert result.exit_code == 0, result.output
    assert "Build login page" in result.output
    assert "March 10, 2025" in result.output
    assert "Anna Schmidt" in result.output
    assert "0. ☑ Design form" in result.output
    assert "1. ☐ Wire API" in result.output
    assert "Move to: In progress" in result.output


def test_show_yaml_output():
    result = runner.invoke(app, ["show", "t2", "-o", "yaml"])

    assert result.exit_code == 0, result.output
    data = yaml.safe_load(result.output)
    assert data["title"] == "Write docs"
    assert data["task_type"] == "done"


def test_show_unknown_task_exits_not_found():
    result = runner.invoke(app, ["show", "missing"])

    assert result.exit_code == 5
    assert "not found" in result.output


# ---------------------------------------------------------------------------
# summary
# ---------------------------------------------------------------------------


def test_summary_counts():
    result = runner.invoke(app, ["summary", "--today", "2025-03-10", "-o", "json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["total"] == 2
    assert data["to_do"] == 1
    assert data["done"] == 1
    assert data["urgent"] == 1
    assert data["urgent_due_today"] == 1
    assert data["next_urgent_deadline"].startswith("2025-03-10")


def test_summary_pretty():
    result = runner.invoke(app, ["summary", "--today", "2025-03-10"])

    assert result.exit_code == 0, result.output
    assert "Tasks in Board" in result.output
    assert "March 10, 2025" in result.output


def test_summary_invalid_day():
    result = runner.invoke(app, ["summary", "--today", "10.03.2025"])

    assert result.exit_code == 2
    assert "Invalid date" in result.output
