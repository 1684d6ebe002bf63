"""Joinboard domain models.

Pydantic models for board entities plus the codec that is the single
entry point for untyped remote data.
"""

from .codec import decode_contact, decode_task, encode_sub_tasks, encode_task
from .config_models import AppConfig
from .core import (
    AssignedContact,
    BoardSummary,
    Contact,
    Document,
    Priority,
    Query,
    SubTask,
    Task,
    TaskType,
)

__all__ = [
    # Board models
    "Task",
    "TaskType",
    "Priority",
    "SubTask",
    "AssignedContact",
    "Contact",
    "BoardSummary",
    # Store boundary
    "Document",
    "Query",
    # Codec
    "decode_task",
    "encode_task",
    "encode_sub_tasks",
    "decode_contact",
    # Config
    "AppConfig",
]
