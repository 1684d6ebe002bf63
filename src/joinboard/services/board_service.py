"""Board column lifecycle.

Columns are ``toDo``, ``inProgress``, ``feedback`` and ``done``. A task can
be moved from any column to any other; moving it to the column it is
already in is allowed and still writes the task.
"""

from __future__ import annotations

from joinboard.exceptions import TaskValidationError
from joinboard.models import Task, TaskType
from joinboard.services.task_repository import TaskRepository
from joinboard.utils.logger import get_logger

COLUMN_TITLES: dict[TaskType, str] = {
    TaskType.TO_DO: "To do",
    TaskType.IN_PROGRESS: "In progress",
    TaskType.FEEDBACK: "Await feedback",
    TaskType.DONE: "Done",
}


def parse_task_type(value: TaskType | str) -> TaskType:
    """Coerce a column name, also accepting ``to-do`` or ``in_progress`` spellings.

    Raises:
        TaskValidationError: If the value names no column
    """
    if isinstance(value, TaskType):
        return value
    try:
        return TaskType(value)
    except ValueError:
        pass
    normalized = value.replace("-", "").replace("_", "").replace(" ", "").lower()
    for task_type in TaskType:
        if task_type.value.lower() == normalized:
            return task_type
    raise TaskValidationError(
        f"Unknown column '{value}'. Use one of: {', '.join(t.value for t in TaskType)}"
    )


class BoardStateMachine:
    """Moves tasks between board columns."""

    def __init__(self, repository: TaskRepository):
        self.repository = repository
        self.logger = get_logger("board")

    @staticmethod
    def states() -> list[TaskType]:
        """All columns in board order."""
        return list(TaskType)

    @staticmethod
    def can_transition(current: TaskType | str, target: TaskType | str) -> bool:
        """Every column can reach every column."""
        parse_task_type(current)
        parse_task_type(target)
        return True

    @staticmethod
    def other_columns(task: Task) -> list[tuple[TaskType, str]]:
        """Move targets for a task: every column except its current one, with titles."""
        return [
            (task_type, title)
            for task_type, title in COLUMN_TITLES.items()
            if task_type != task.task_type
        ]

    async def move(self, task: Task, new_type: TaskType | str) -> Task:
        """Move a task to a column and persist it.

        Args:
            task: Persisted task; updated in place
            new_type: Target column

        Returns:
            The same task, with its new column

        Raises:
            TaskValidationError: If the task has no id or the column is unknown
            RemoteWriteError: If the write fails
        """
        if not task.id:
            raise TaskValidationError("Cannot move a task that has not been saved")
        target = parse_task_type(new_type)
        previous = task.task_type
        task.task_type = target
        await self.repository.update(task)
        self.logger.info("moved task %s from %s to %s", task.id, previous.value, target.value)
        return task

    async def move_by_id(self, task_id: str, new_type: TaskType | str) -> Task:
        """Move a cached task to a column.

        Raises:
            NotFoundLocalError: If the task is not in the cache
            TaskValidationError: If the column is unknown
            RemoteWriteError: If the write fails
        """
        return await self.move(self.repository.get(task_id), new_type)
