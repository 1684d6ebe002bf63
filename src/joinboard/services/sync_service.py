"""Sync engine keeping the local task cache in step with the remote store.

The engine is the only writer of the task cache. Every snapshot from the
live query is decoded in full and then swapped in with a single attribute
assignment, so readers see either the previous complete tuple or the new
one. Stream errors are logged and leave the last good cache in place.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from contextlib import aclosing, suppress
from datetime import UTC, datetime

from joinboard.exceptions import RemoteReadError
from joinboard.models import Document, Query, Task, decode_task
from joinboard.repositories import DocumentStore
from joinboard.utils.logger import get_logger

SnapshotListener = Callable[[tuple[Task, ...]], None]


class Subscription:
    """Handle for a live query started by ``SyncEngine.subscribe``."""

    def __init__(self, engine: SyncEngine):
        self._engine = engine
        self._cancelled = False

    @property
    def active(self) -> bool:
        """Whether this handle still controls a running live query."""
        return (
            not self._cancelled
            and self._engine._subscription is self
            and self._engine.is_subscribed
        )

    def unsubscribe(self) -> None:
        """Cancel the live query. Safe to call more than once."""
        if self._cancelled:
            return
        self._cancelled = True
        if self._engine._subscription is self:
            self._engine.unsubscribe()


class SyncEngine:
    """Owns the live query on the tasks collection and the task cache."""

    def __init__(
        self,
        store: DocumentStore,
        *,
        collection: str = "tasks",
        order_by: str | None = "priority",
        reconnect_delay: float | None = None,
        logger: logging.Logger | None = None,
    ):
        """Initialize the engine.

        Args:
            store: Remote document store
            collection: Tasks collection name
            order_by: Field the live query is ordered by
            reconnect_delay: Seconds to wait before re-opening a failed live
                query; None stops listening after the first failure
            logger: Logger override, defaults to the application logger
        """
        self.store = store
        self.query = Query(collection=collection, order_by=order_by)
        self.reconnect_delay = reconnect_delay
        self.logger = logger or get_logger("sync")

        self._tasks: tuple[Task, ...] = ()
        self._generation = 0
        self._listeners: list[SnapshotListener] = []
        self._consumer: asyncio.Task[None] | None = None
        self._subscription: Subscription | None = None

        self.snapshot_count = 0
        self.last_synced_at: datetime | None = None

    async def __aenter__(self) -> SyncEngine:
        self.subscribe()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()

    @property
    def tasks(self) -> tuple[Task, ...]:
        """The latest complete task list, in live-query order."""
        return self._tasks

    @property
    def is_subscribed(self) -> bool:
        """Whether a live query is currently running."""
        return self._consumer is not None and not self._consumer.done()

    def add_listener(self, listener: SnapshotListener) -> None:
        """Register a callback invoked with the new cache after each replacement."""
        self._listeners.append(listener)

    def remove_listener(self, listener: SnapshotListener) -> None:
        """Unregister a callback. Unknown callbacks are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _replace_cache(self, documents: Sequence[Document]) -> tuple[Task, ...]:
        tasks = tuple(decode_task(doc.id, doc.data) for doc in documents)
        self._tasks = tasks
        self._generation += 1
        self.snapshot_count += 1
        self.last_synced_at = datetime.now(UTC)
        self.logger.debug(
            "task cache replaced: %d tasks (snapshot %d)", len(tasks), self.snapshot_count
        )
        for listener in list(self._listeners):
            try:
                listener(tasks)
            except Exception:
                self.logger.exception("snapshot listener %r failed", listener)
        return tasks

    def subscribe(self) -> Subscription:
        """Open the live query and start applying snapshots.

        Must be called from a running event loop. Calling it while already
        subscribed returns the existing handle.

        Returns:
            Subscription handle
        """
        if self.is_subscribed and self._subscription is not None:
            return self._subscription
        self._consumer = asyncio.get_running_loop().create_task(
            self._consume(), name=f"sync:{self.query.collection}"
        )
        self._subscription = Subscription(self)
        self.logger.info(
            "subscribed to %s ordered by %s", self.query.collection, self.query.order_by
        )
        return self._subscription

    def unsubscribe(self) -> None:
        """Cancel the live query. Idempotent."""
        consumer, self._consumer = self._consumer, None
        self._subscription = None
        if consumer is not None and not consumer.done():
            consumer.cancel()
            self.logger.info("unsubscribed from %s", self.query.collection)

    async def stop(self) -> None:
        """Unsubscribe and wait until the live query has been torn down."""
        consumer = self._consumer
        self.unsubscribe()
        if consumer is not None:
            with suppress(asyncio.CancelledError):
                await consumer

    async def _consume(self) -> None:
        while True:
            try:
                async with aclosing(self.store.subscribe(self.query)) as stream:
                    async for documents in stream:
                        self._replace_cache(documents)
            except RemoteReadError as e:
                self.logger.error("live query on %s failed: %s", self.query.collection, e)
            except Exception:
                self.logger.exception("live query on %s failed", self.query.collection)
            else:
                self.logger.warning("live query on %s ended", self.query.collection)

            if self.reconnect_delay is None:
                return
            await asyncio.sleep(self.reconnect_delay)
            self.logger.info("re-opening live query on %s", self.query.collection)

    async def load_once(self) -> list[Task]:
        """Read the collection once and replace the cache with the result.

        Failures are logged and leave the cache unchanged. A result that
        arrives after the live query has already applied a newer snapshot
        is discarded.

        Returns:
            The task list now in the cache
        """
        generation = self._generation
        try:
            documents = await self.store.get_all(self.query)
        except RemoteReadError as e:
            self.logger.error("loading %s failed: %s", self.query.collection, e)
            return list(self._tasks)

        if generation != self._generation:
            self.logger.debug("one-shot read of %s superseded by live snapshot", self.query.collection)
            return list(self._tasks)
        return list(self._replace_cache(documents))
