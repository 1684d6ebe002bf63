"""Summary page figures derived from the task cache."""

from __future__ import annotations

from datetime import UTC, date, datetime

from joinboard.models import BoardSummary, Priority, TaskType
from joinboard.services.task_repository import TaskRepository


class SummaryService:
    """Computes the summary overview. Always recomputed from the live cache."""

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    def next_urgent_deadline(self, today: date | None = None) -> datetime | None:
        """Earliest due date among urgent tasks due today or later."""
        today = today or datetime.now(UTC).date()
        due_dates = [
            task.due_date
            for task in self.repository.tasks
            if task.priority == Priority.URGENT and task.due_date.date() >= today
        ]
        return min(due_dates, default=None)

    def overview(self, today: date | None = None) -> BoardSummary:
        """Build the summary counts.

        Args:
            today: Day used for "due today" figures, defaults to the current UTC date
        """
        today = today or datetime.now(UTC).date()
        repo = self.repository
        return BoardSummary(
            total=repo.count_all(),
            to_do=repo.count_by_type(TaskType.TO_DO),
            in_progress=repo.count_by_type(TaskType.IN_PROGRESS),
            feedback=repo.count_by_type(TaskType.FEEDBACK),
            done=repo.count_by_type(TaskType.DONE),
            urgent=repo.count_by_priority(Priority.URGENT),
            urgent_due_today=repo.count_urgent_due_on(today),
            next_urgent_deadline=self.next_urgent_deadline(today),
        )
