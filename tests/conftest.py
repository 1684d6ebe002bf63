"""Shared test fixtures and configuration.

Keeps logs and config files inside ``tmp_path`` and provides a scripted
document store whose live query is driven step by step from the test.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Any
from unittest.mock import patch

import pytest

from joinboard.models import Document, Query
from joinboard.repositories import DocumentStore

# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


def _reset_logger() -> None:
    import joinboard.utils.logger as logger_mod

    logger_mod._logger = None
    app_logger = logging.getLogger("joinboard")
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Redirect the log and config directories to *tmp_path* for every test."""
    from joinboard.services.config_service import get_config_service

    monkeypatch.delenv("JOINBOARD_API_TOKEN", raising=False)
    _reset_logger()
    get_config_service.cache_clear()
    with patch("joinboard.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        with patch(
            "joinboard.services.config_service.user_config_dir",
            return_value=str(tmp_path / "config"),
        ):
            yield tmp_path
    get_config_service.cache_clear()
    _reset_logger()


# ---------------------------------------------------------------------------
# Scripted document store
# ---------------------------------------------------------------------------

END_OF_STREAM = object()


class ScriptedStore(DocumentStore):
    """DocumentStore whose live queries replay what the test feeds them.

    Each ``subscribe`` call opens a new stream reading from ``feed``: a
    list of documents is yielded as a snapshot, an exception is raised from
    the stream, ``END_OF_STREAM`` ends it normally.
    """

    def __init__(self, documents: list[Document] | None = None):
        self.documents = list(documents or [])
        self.get_all_error: Exception | None = None
        self.get_all_gate: asyncio.Event | None = None
        self.feed: asyncio.Queue[Any] = asyncio.Queue()
        self.queries: list[Query] = []
        self.opened = 0
        self.closed = 0
        self.writes: list[tuple[str, str, Any]] = []

    def push(self, documents: list[Document]) -> None:
        self.feed.put_nowait(documents)

    def fail(self, error: Exception) -> None:
        self.feed.put_nowait(error)

    def end(self) -> None:
        self.feed.put_nowait(END_OF_STREAM)

    async def create(self, collection: str, data: dict[str, Any]) -> str:
        self.writes.append(("create", collection, data))
        return "new-id"

    async def get_all(self, query: Query) -> list[Document]:
        self.queries.append(query)
        if self.get_all_gate is not None:
            await self.get_all_gate.wait()
        if self.get_all_error is not None:
            raise self.get_all_error
        return list(self.documents)

    async def get_one(self, collection: str, doc_id: str) -> Document | None:
        return next((d for d in self.documents if d.id == doc_id), None)

    async def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        self.writes.append(("update", doc_id, fields))

    async def delete(self, collection: str, doc_id: str) -> None:
        self.writes.append(("delete", doc_id, None))

    async def subscribe(self, query: Query) -> AsyncIterator[list[Document]]:
        self.queries.append(query)
        self.opened += 1
        try:
            while True:
                item = await self.feed.get()
                if item is END_OF_STREAM:
                    return
                if isinstance(item, Exception):
                    raise item
                yield item
        finally:
            self.closed += 1


@pytest.fixture()
def scripted_store():
    return ScriptedStore()


@pytest.fixture()
def wait_until():
    """Return a coroutine function polling a predicate until it holds."""

    async def _wait_until(predicate, timeout: float = 2.0) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not predicate():
            if loop.time() > deadline:
                raise AssertionError("condition not reached in time")
            await asyncio.sleep(0.01)

    return _wait_until


def task_doc(doc_id: str, **fields: Any) -> Document:
    """Build a task document with sensible wire defaults."""
    data: dict[str, Any] = {
        "title": f"Task {doc_id}",
        "description": "",
        "category": "User Story",
        "dueDate": "2025-03-10T00:00:00+00:00",
        "priority": "medium",
        "subTasks": [],
        "taskType": "toDo",
        "assignedTo": [],
    }
    data.update(fields)
    return Document(id=doc_id, data=data)


@pytest.fixture()
def make_doc():
    return task_doc


# ---------------------------------------------------------------------------
# Board over an in-memory store (command tests)
# ---------------------------------------------------------------------------

COMMAND_MODULES = (
    "board_command",
    "summary_command",
    "task_commands",
    "subtask_command",
    "watch_command",
)


def _seed() -> dict[str, dict[str, dict[str, Any]]]:
    return {
        "tasks": {
            "t1": {
                "title": "Build login page",
                "description": "OAuth flow",
                "category": "User Story",
                "dueDate": "2025-03-10T00:00:00+00:00",
                "priority": "urgent",
                "subTasks": [
                    {"text": "Design form", "isChecked": True},
                    {"text": "Wire API", "isChecked": False},
                ],
                "taskType": "toDo",
                "assignedTo": [{"contactId": "c1"}, {"contactId": "c9"}],
            },
            "t2": {
                "title": "Write docs",
                "description": "",
                "category": "Technical Task",
                "dueDate": "2025-03-20T00:00:00+00:00",
                "priority": "low",
                "subTasks": [],
                "taskType": "done",
                "assignedTo": [],
            },
        },
        "contacts": {
            "c1": {"name": "Anna Schmidt", "mail": "anna@example.com", "phone": ""},
        },
    }


@pytest.fixture()
def board_store():
    from joinboard.adapters.memory import InMemoryDocumentStore

    return InMemoryDocumentStore(_seed())


@pytest.fixture()
def patch_board(board_store):
    """Make every command open a BoardContext over ``board_store``."""
    from joinboard.models import AppConfig
    from joinboard.services.board_context import BoardContext

    config = AppConfig.model_validate(
        {"store": {"backend": "memory"}, "sync": {"reconnect_delay": None}}
    )

    def _open():
        return BoardContext(board_store, config)

    patches = [
        patch(f"joinboard.commands.{module}.open_board_context", side_effect=_open)
        for module in COMMAND_MODULES
    ]
    for p in patches:
        p.start()
    yield board_store
    for p in patches:
        p.stop()
