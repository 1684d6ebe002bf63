"""Board domain models."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class TaskType(str, Enum):
    """Board column a task lives in."""

    TO_DO = "toDo"
    IN_PROGRESS = "inProgress"
    FEEDBACK = "feedback"
    DONE = "done"


class Priority(str, Enum):
    """Task priority.

    ``NONE`` is what a stored task without a recognised priority decodes to.
    """

    NONE = ""
    LOW = "low"
    MEDIUM = "medium"
    URGENT = "urgent"


class SubTask(BaseModel):
    """Checklist entry owned by a task.

    Attributes:
        text: Subtask label
        is_checked: Whether the entry has been ticked off
    """

    text: str = ""
    is_checked: bool = False


class AssignedContact(BaseModel):
    """Weak reference to a contact in the contacts directory.

    The referenced contact may have been deleted; resolve it through
    ``ContactReferenceResolver`` instead of trusting it exists.
    """

    contact_id: str


class Contact(BaseModel):
    """Contact record as exposed by the contacts directory."""

    id: str
    name: str = ""
    mail: str = ""
    phone: str = ""


class Task(BaseModel):
    """Task model representing a board card.

    Attributes:
        id: Remote document id; ``None`` until the task has been persisted
        title: Short task title
        description: Free-form details
        category: Free-form category (e.g. "User Story")
        due_date: Due date
        priority: Priority level
        task_type: Board column
        sub_tasks: Ordered checklist, display order is list order
        assigned_to: Contact references, possibly dangling
    """

    id: str | None = None
    title: str = ""
    description: str = ""
    category: str = ""
    due_date: datetime = Field(default_factory=lambda: datetime.now(UTC))
    priority: Priority = Priority.NONE
    task_type: TaskType = TaskType.TO_DO
    sub_tasks: list[SubTask] = Field(default_factory=list)
    assigned_to: list[AssignedContact] = Field(default_factory=list)


class Document(BaseModel):
    """A raw document as returned by the remote store."""

    id: str
    data: dict[str, Any] = Field(default_factory=dict)


class Query(BaseModel):
    """Live or one-shot query against a collection.

    Attributes:
        collection: Collection name
        order_by: Field to sort ascending by; documents without it are excluded
    """

    collection: str
    order_by: str | None = None


class BoardSummary(BaseModel):
    """Aggregated counts shown on the summary page."""

    total: int = 0
    to_do: int = 0
    in_progress: int = 0
    feedback: int = 0
    done: int = 0
    urgent: int = 0
    urgent_due_today: int = 0
    next_urgent_deadline: datetime | None = None
