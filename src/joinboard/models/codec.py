"""Mapping between raw remote documents and board models.

Decoding is total: whatever shape a stored document has, ``decode_task``
returns a usable ``Task`` with defaults filled in. Encoding is strict and
always emits the full set of wire fields, never the id.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, date, datetime
from typing import Any

from joinboard.models.core import (
    AssignedContact,
    Contact,
    Priority,
    SubTask,
    Task,
    TaskType,
)

TASK_FIELDS = (
    "title",
    "description",
    "category",
    "dueDate",
    "priority",
    "subTasks",
    "taskType",
    "assignedTo",
)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _decode_due_date(value: Any) -> datetime:
    """Parse the stored due date, falling back to now."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if isinstance(value, bool):
        return datetime.now(UTC)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, UTC)
        except (OverflowError, OSError, ValueError):
            return datetime.now(UTC)
    if isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return datetime.now(UTC)
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    if isinstance(value, Mapping) and "seconds" in value:
        # Timestamp objects serialized as {"seconds": ..., "nanoseconds": ...}
        try:
            seconds = float(value["seconds"]) + float(value.get("nanoseconds", 0)) / 1e9
            return datetime.fromtimestamp(seconds, UTC)
        except (TypeError, ValueError, OverflowError, OSError):
            return datetime.now(UTC)
    return datetime.now(UTC)


def _decode_enum(enum_cls, value: Any, default):
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        return default


def _decode_sub_tasks(value: Any) -> list[SubTask]:
    if not isinstance(value, list):
        return []
    sub_tasks = []
    for item in value:
        if not isinstance(item, Mapping):
            continue
        sub_tasks.append(
            SubTask(text=_text(item.get("text")), is_checked=item.get("isChecked") is True)
        )
    return sub_tasks


def _decode_assigned_to(value: Any) -> list[AssignedContact]:
    if not isinstance(value, list):
        return []
    assigned = []
    for item in value:
        if isinstance(item, Mapping):
            contact_id = item.get("contactId")
        else:
            contact_id = item
        if isinstance(contact_id, str) and contact_id:
            assigned.append(AssignedContact(contact_id=contact_id))
    return assigned


def decode_task(task_id: str, raw: Mapping[str, Any] | None) -> Task:
    """Build a Task from a raw document body.

    Args:
        task_id: Document id assigned by the remote store
        raw: Document body, possibly partial or malformed

    Returns:
        Task with every field populated
    """
    if not isinstance(raw, Mapping):
        raw = {}
    return Task(
        id=task_id,
        title=_text(raw.get("title")),
        description=_text(raw.get("description")),
        category=_text(raw.get("category")),
        due_date=_decode_due_date(raw.get("dueDate")),
        priority=_decode_enum(Priority, raw.get("priority"), Priority.NONE),
        task_type=_decode_enum(TaskType, raw.get("taskType"), TaskType.TO_DO),
        sub_tasks=_decode_sub_tasks(raw.get("subTasks")),
        assigned_to=_decode_assigned_to(raw.get("assignedTo")),
    )


def encode_sub_tasks(sub_tasks: Iterable[SubTask]) -> list[dict[str, Any]]:
    """Encode a subtask list in display order."""
    return [{"text": s.text, "isChecked": s.is_checked} for s in sub_tasks]


def encode_task(task: Task) -> dict[str, Any]:
    """Encode a Task into its full document body (without the id)."""
    return {
        "title": task.title,
        "description": task.description,
        "category": task.category,
        "dueDate": task.due_date.isoformat(),
        "priority": task.priority.value,
        "subTasks": encode_sub_tasks(task.sub_tasks),
        "taskType": task.task_type.value,
        "assignedTo": [{"contactId": a.contact_id} for a in task.assigned_to],
    }


def decode_contact(contact_id: str, raw: Mapping[str, Any] | None) -> Contact:
    """Build a Contact from a raw directory document."""
    if not isinstance(raw, Mapping):
        raw = {}
    return Contact(
        id=contact_id,
        name=_text(raw.get("name")),
        mail=_text(raw.get("mail")),
        phone=_text(raw.get("phone")),
    )
