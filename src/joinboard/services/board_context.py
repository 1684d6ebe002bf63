"""Composition of the board engine.

``BoardContext`` builds every component explicitly from an ``AppConfig``
and hands them to the surfaces that need them. There are no module-level
service instances: each context owns its store, engine and repository, and
``close()`` tears them down.

Usage:
    async with BoardContext.from_config(config) as board:
        board.repository.count_all()
        await board.board.move_by_id(task_id, "done")
"""

from __future__ import annotations

from joinboard.adapters.contacts import StoreContactDirectory
from joinboard.adapters.memory import InMemoryDocumentStore
from joinboard.adapters.rest_api import RestApiDocumentStore
from joinboard.api.client import APIClient
from joinboard.models.config_models import AppConfig
from joinboard.repositories import ContactDirectory, DocumentStore
from joinboard.services.board_service import BoardStateMachine
from joinboard.services.contact_service import ContactReferenceResolver
from joinboard.services.subtask_service import SubtaskManager
from joinboard.services.summary_service import SummaryService
from joinboard.services.sync_service import SyncEngine
from joinboard.services.task_repository import TaskRepository
from joinboard.utils.logger import get_logger


def build_store(config: AppConfig) -> DocumentStore:
    """Create the document store selected by ``store.backend``."""
    if config.store.backend == "memory":
        return InMemoryDocumentStore()
    return RestApiDocumentStore(APIClient(config.api))


class BoardContext:
    """Explicitly wired set of board components sharing one task cache."""

    def __init__(
        self,
        store: DocumentStore,
        config: AppConfig | None = None,
        contacts: ContactDirectory | None = None,
    ):
        """Wire the components.

        Args:
            store: Document store for tasks (and contacts, unless given)
            config: Application config, defaults to ``AppConfig()``
            contacts: Contacts directory override
        """
        self.config = config or AppConfig()
        self.store = store
        self.engine = SyncEngine(
            store,
            collection=self.config.store.tasks_collection,
            order_by=self.config.store.order_by,
            reconnect_delay=self.config.sync.reconnect_delay,
        )
        self.repository = TaskRepository(store, self.engine)
        self.subtasks = SubtaskManager(self.repository)
        self.board = BoardStateMachine(self.repository)
        self.summary = SummaryService(self.repository)
        self.contacts = contacts or StoreContactDirectory(
            store, self.config.store.contacts_collection
        )
        self.resolver = ContactReferenceResolver(
            self.contacts, self.config.board.max_visible_assignees
        )
        self.logger = get_logger("context")

    @classmethod
    def from_config(cls, config: AppConfig) -> BoardContext:
        """Build a context with the store selected by the config."""
        return cls(build_store(config), config)

    async def __aenter__(self) -> BoardContext:
        try:
            await self.start(live=False)
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def start(self, live: bool = True) -> None:
        """Load contacts and tasks, optionally opening the live query.

        Contact load failures propagate as ``RemoteReadError``; task load
        failures are logged by the engine and leave the cache empty.
        """
        if live:
            self.engine.subscribe()
        await self.contacts.refresh()
        await self.engine.load_once()
        self.logger.debug(
            "board context started (live=%s, %d tasks, %d contacts)",
            live,
            len(self.engine.tasks),
            len(self.contacts.contacts),
        )

    async def close(self) -> None:
        """Stop the live query and release the transport."""
        try:
            await self.engine.stop()
        finally:
            await self.store.close()
