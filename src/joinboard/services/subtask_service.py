"""Subtask operations on a task's checklist.

The store has no per-subtask endpoint: every change re-sends the whole
ordered ``subTasks`` list.
"""

from __future__ import annotations

from joinboard.exceptions import NotFoundLocalError, TaskValidationError
from joinboard.models import Task
from joinboard.services.task_repository import TaskRepository


def _check_index(task: Task, index: int) -> None:
    if not task.id:
        raise TaskValidationError("Task has not been saved yet")
    if not 0 <= index < len(task.sub_tasks):
        raise NotFoundLocalError(
            f"Subtask {index} not found on task {task.id} ({len(task.sub_tasks)} subtasks)"
        )


class SubtaskManager:
    """Toggles and removes subtasks and persists the result."""

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    async def toggle(self, task: Task, index: int | None = None) -> None:
        """Persist a task after a subtask check state changed.

        Args:
            task: Task whose subtasks were changed locally
            index: If given, flip this subtask before persisting

        Raises:
            TaskValidationError: If an index is given and the task has no id
            NotFoundLocalError: If the index is out of range
            RemoteWriteError: If the write fails
        """
        if index is not None:
            _check_index(task, index)
            sub_task = task.sub_tasks[index]
            sub_task.is_checked = not sub_task.is_checked
        await self.repository.update(task)

    async def delete_subtask(self, task: Task, index: int) -> None:
        """Remove one subtask and persist the remaining list.

        Raises:
            TaskValidationError: If the task has no id
            NotFoundLocalError: If the index is out of range
            RemoteWriteError: If the write fails
        """
        _check_index(task, index)
        del task.sub_tasks[index]
        await self.repository.update_sub_tasks(task)

    @staticmethod
    def progress(task: Task) -> tuple[int, int]:
        """Return ``(checked, total)`` for the card progress bar."""
        checked = sum(1 for sub_task in task.sub_tasks if sub_task.is_checked)
        return checked, len(task.sub_tasks)
