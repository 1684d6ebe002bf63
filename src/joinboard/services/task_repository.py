"""Task repository - read accessors over the synced cache and write-through CRUD.

Reads come from the sync engine's cache. Writes go straight to the remote
store and are not applied locally; the cache catches up with the next
snapshot (or an explicit ``refresh``).
"""

from __future__ import annotations

from datetime import date

from joinboard.exceptions import NotFoundLocalError
from joinboard.models import Priority, Task, TaskType, encode_sub_tasks, encode_task
from joinboard.repositories import DocumentStore
from joinboard.services.sync_service import SyncEngine
from joinboard.utils.logger import get_logger


class TaskRepository:
    """CRUD surface for tasks shared by every board surface."""

    def __init__(self, store: DocumentStore, engine: SyncEngine):
        """Initialize the repository.

        Args:
            store: Remote document store the writes go to
            engine: Sync engine owning the task cache
        """
        self.store = store
        self.engine = engine
        self.collection = engine.query.collection
        self.logger = get_logger("tasks")

    @property
    def tasks(self) -> tuple[Task, ...]:
        """Current task cache."""
        return self.engine.tasks

    async def refresh(self) -> list[Task]:
        """Force a one-shot read of the collection into the cache."""
        return await self.engine.load_once()

    async def add(self, task: Task) -> str:
        """Create a task in the remote store.

        Args:
            task: Task to create; any id it carries is ignored

        Returns:
            Id assigned by the store

        Raises:
            RemoteWriteError: If the write fails
        """
        task_id = await self.store.create(self.collection, encode_task(task))
        self.logger.info("created task %s", task_id)
        return task_id

    async def update(self, task: Task) -> None:
        """Overwrite the stored task with the full encoded record.

        Tasks without an id have never been persisted and are skipped.

        Raises:
            RemoteWriteError: If the write fails
        """
        if not task.id:
            self.logger.debug("skipping update of unsaved task %r", task.title)
            return
        await self.store.update(self.collection, task.id, encode_task(task))
        self.logger.info("updated task %s", task.id)

    async def update_sub_tasks(self, task: Task) -> None:
        """Write only the ``subTasks`` field of a persisted task.

        Raises:
            RemoteWriteError: If the write fails
        """
        if not task.id:
            self.logger.debug("skipping subtask update of unsaved task %r", task.title)
            return
        await self.store.update(
            self.collection, task.id, {"subTasks": encode_sub_tasks(task.sub_tasks)}
        )
        self.logger.info("updated subtasks of task %s", task.id)

    async def delete(self, task_id: str) -> None:
        """Delete a task. Deleting an unknown id succeeds.

        Raises:
            RemoteWriteError: If the write fails
        """
        await self.store.delete(self.collection, task_id)
        self.logger.info("deleted task %s", task_id)

    def find_index_by_id(self, task_id: str) -> int:
        """Return the cache index of a task, or -1 if it is not cached."""
        for index, task in enumerate(self.engine.tasks):
            if task.id == task_id:
                return index
        return -1

    def get(self, task_id: str) -> Task:
        """Return a detached copy of a cached task for local editing.

        Raises:
            NotFoundLocalError: If the task is not in the cache
        """
        index = self.find_index_by_id(task_id)
        if index == -1:
            raise NotFoundLocalError(f"Task {task_id} not found")
        return self.engine.tasks[index].model_copy(deep=True)

    def count_all(self) -> int:
        return len(self.engine.tasks)

    def count_by_type(self, task_type: TaskType | str) -> int:
        return sum(1 for task in self.engine.tasks if task.task_type == task_type)

    def count_by_priority(self, priority: Priority | str) -> int:
        return sum(1 for task in self.engine.tasks if task.priority == priority)

    def count_urgent_due_on(self, day: date) -> int:
        """Count urgent tasks whose due date falls on ``day``."""
        return sum(
            1
            for task in self.engine.tasks
            if task.priority == Priority.URGENT and task.due_date.date() == day
        )

    def tasks_in(self, task_type: TaskType | str) -> list[Task]:
        """Tasks of one board column, in cache order."""
        return [task for task in self.engine.tasks if task.task_type == task_type]

    def search(self, text: str) -> list[Task]:
        """Tasks whose title or description contains ``text`` (case-insensitive)."""
        needle = text.strip().lower()
        if not needle:
            return list(self.engine.tasks)
        return [
            task
            for task in self.engine.tasks
            if needle in task.title.lower() or needle in task.description.lower()
        ]
