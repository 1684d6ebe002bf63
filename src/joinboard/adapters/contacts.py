"""Contacts directory read from a document store collection."""

from __future__ import annotations

from collections.abc import Sequence

from joinboard.models import Contact, Query, decode_contact
from joinboard.repositories.repository import ContactDirectory, DocumentStore


class StoreContactDirectory(ContactDirectory):
    """Read-only contacts snapshot loaded from the ``contacts`` collection."""

    def __init__(self, store: DocumentStore, collection: str = "contacts"):
        self.store = store
        self.query = Query(collection=collection, order_by="name")
        self._contacts: tuple[Contact, ...] = ()

    @property
    def contacts(self) -> Sequence[Contact]:
        return self._contacts

    async def refresh(self) -> Sequence[Contact]:
        documents = await self.store.get_all(self.query)
        self._contacts = tuple(decode_contact(doc.id, doc.data) for doc in documents)
        return self._contacts
