"""Port definitions for the remote document store and the contacts directory.

The board engine depends only on these interfaces, so the storage backend
(in-process store, remote HTTP store) can be swapped without touching the
engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence
from typing import Any

from joinboard.models import Contact, Document, Query


class DocumentStore(ABC):
    """Abstract base class for a collection-oriented document store.

    Documents are keyed by opaque ids the store assigns. Read failures are
    reported as ``RemoteReadError``, write failures as ``RemoteWriteError``.
    """

    @abstractmethod
    async def create(self, collection: str, data: dict[str, Any]) -> str:
        """Create a document.

        Args:
            collection: Collection name
            data: Document body

        Returns:
            Id assigned by the store

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            RemoteWriteError: If the write fails
        """
        raise NotImplementedError("DocumentStore.create() must be implemented by adapter")

    @abstractmethod
    async def get_all(self, query: Query) -> list[Document]:
        """Read every document matching the query.

        Args:
            query: Collection and optional ordering

        Returns:
            Documents in query order

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            RemoteReadError: If the read fails
        """
        raise NotImplementedError("DocumentStore.get_all() must be implemented by adapter")

    @abstractmethod
    async def get_one(self, collection: str, doc_id: str) -> Document | None:
        """Read a single document.

        Returns:
            The document, or None if it does not exist

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            RemoteReadError: If the read fails
        """
        raise NotImplementedError("DocumentStore.get_one() must be implemented by adapter")

    @abstractmethod
    async def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        """Overwrite the given top-level fields of an existing document.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            RemoteWriteError: If the document does not exist or the write fails
        """
        raise NotImplementedError("DocumentStore.update() must be implemented by adapter")

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document. Deleting a missing document succeeds.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            RemoteWriteError: If the write fails
        """
        raise NotImplementedError("DocumentStore.delete() must be implemented by adapter")

    @abstractmethod
    def subscribe(self, query: Query) -> AsyncIterator[list[Document]]:
        """Open a live query.

        The iterator yields the current result set first and then a full
        result set after every change. Closing the iterator (or cancelling
        the task consuming it) ends the live query.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            RemoteReadError: From the iterator, if the live query fails
        """
        raise NotImplementedError("DocumentStore.subscribe() must be implemented by adapter")

    async def close(self) -> None:
        """Release transport resources. No-op by default."""


class ContactDirectory(ABC):
    """Read-only view of the contacts directory."""

    @property
    @abstractmethod
    def contacts(self) -> Sequence[Contact]:
        """Current contacts snapshot."""
        raise NotImplementedError(
            "ContactDirectory.contacts must be implemented by adapter"
        )

    @abstractmethod
    async def refresh(self) -> Sequence[Contact]:
        """Re-read the directory and return the new snapshot.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            RemoteReadError: If the directory cannot be read
        """
        raise NotImplementedError(
            "ContactDirectory.refresh() must be implemented by adapter"
        )
