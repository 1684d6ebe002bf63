"""In-process document store with live queries.

Used for the ``memory`` backend and in tests. Payloads are deep-copied on
the way in and out so callers never share mutable state with the store.
"""

from __future__ import annotations

import asyncio
import copy
import uuid
from collections.abc import AsyncIterator, Iterable, Sequence
from typing import Any

from joinboard.exceptions import RemoteWriteError
from joinboard.models import Contact, Document, Query
from joinboard.repositories.repository import ContactDirectory, DocumentStore


def _sort_key(value: Any) -> tuple[int, Any]:
    # Numbers sort before strings, anything else after both
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value)
    if isinstance(value, str):
        return (1, value)
    return (2, str(value))


class InMemoryDocumentStore(DocumentStore):
    """Document store held in a dict of collections."""

    def __init__(self, seed: dict[str, dict[str, dict[str, Any]]] | None = None):
        """Initialize the store.

        Args:
            seed: Optional ``{collection: {doc_id: data}}`` initial content
        """
        self._collections: dict[str, dict[str, dict[str, Any]]] = copy.deepcopy(seed or {})
        self._listeners: dict[str, list[asyncio.Queue[None]]] = {}

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex[:20]

    def _snapshot(self, query: Query) -> list[Document]:
        docs = [
            Document(id=doc_id, data=copy.deepcopy(data))
            for doc_id, data in self._collections.get(query.collection, {}).items()
        ]
        if query.order_by:
            field = query.order_by
            docs = [d for d in docs if field in d.data]
            docs.sort(key=lambda d: _sort_key(d.data[field]))
        return docs

    def _notify(self, collection: str) -> None:
        for queue in self._listeners.get(collection, []):
            queue.put_nowait(None)

    async def create(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = self._new_id()
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(data)
        self._notify(collection)
        return doc_id

    async def get_all(self, query: Query) -> list[Document]:
        return self._snapshot(query)

    async def get_one(self, collection: str, doc_id: str) -> Document | None:
        data = self._collections.get(collection, {}).get(doc_id)
        if data is None:
            return None
        return Document(id=doc_id, data=copy.deepcopy(data))

    async def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        docs = self._collections.get(collection, {})
        if doc_id not in docs:
            raise RemoteWriteError(f"No document to update: {collection}/{doc_id}")
        docs[doc_id].update(copy.deepcopy(fields))
        self._notify(collection)

    async def delete(self, collection: str, doc_id: str) -> None:
        if self._collections.get(collection, {}).pop(doc_id, None) is not None:
            self._notify(collection)

    async def subscribe(self, query: Query) -> AsyncIterator[list[Document]]:
        queue: asyncio.Queue[None] = asyncio.Queue()
        listeners = self._listeners.setdefault(query.collection, [])
        listeners.append(queue)
        try:
            yield self._snapshot(query)
            while True:
                await queue.get()
                # Several writes since the last delivery collapse into one snapshot
                while not queue.empty():
                    queue.get_nowait()
                yield self._snapshot(query)
        finally:
            listeners.remove(queue)

    def listener_count(self, collection: str) -> int:
        """Number of open live queries on a collection."""
        return len(self._listeners.get(collection, []))


class StaticContactDirectory(ContactDirectory):
    """Contacts directory backed by a fixed list."""

    def __init__(self, contacts: Iterable[Contact] = ()):
        self._contacts = tuple(contacts)

    @property
    def contacts(self) -> Sequence[Contact]:
        return self._contacts

    async def refresh(self) -> Sequence[Contact]:
        return self._contacts
