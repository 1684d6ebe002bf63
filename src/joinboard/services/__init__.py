"""Services module for joinboard - board engine and business logic layer."""

from .board_context import BoardContext
from .board_service import COLUMN_TITLES, BoardStateMachine
from .contact_service import ContactReferenceResolver
from .subtask_service import SubtaskManager
from .summary_service import SummaryService
from .sync_service import Subscription, SyncEngine
from .task_repository import TaskRepository

__all__ = [
    "BoardContext",
    "SyncEngine",
    "Subscription",
    "TaskRepository",
    "SubtaskManager",
    "BoardStateMachine",
    "COLUMN_TITLES",
    "ContactReferenceResolver",
    "SummaryService",
]
