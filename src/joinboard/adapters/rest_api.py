"""REST API adapter - DocumentStore implementation over HTTP.

Endpoints (relative to ``api.endpoint``):

- ``POST   /v1/collections/{collection}/documents`` -> ``{"id": ...}``
- ``GET    /v1/collections/{collection}/documents?order_by=...`` -> ``{"documents": [...]}``
- ``GET    /v1/collections/{collection}/documents/{id}`` -> ``{"id": ..., "data": {...}}``
- ``PATCH  /v1/collections/{collection}/documents/{id}`` with the fields to overwrite
- ``DELETE /v1/collections/{collection}/documents/{id}``
- ``GET    /v1/collections/{collection}/listen?order_by=...`` -> NDJSON stream,
  one ``{"documents": [...]}`` result set per line
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import httpx

from joinboard.api.client import APIClient
from joinboard.exceptions import RemoteReadError, RemoteWriteError
from joinboard.models import Document, Query
from joinboard.repositories.repository import DocumentStore


def _parse_documents(payload: Any) -> list[Document]:
    """Extract documents from a result-set payload."""
    items = payload.get("documents", []) if isinstance(payload, dict) else payload
    if not isinstance(items, list):
        raise RemoteReadError(f"Unexpected result set payload: {type(payload).__name__}")
    documents = []
    for item in items:
        if isinstance(item, dict) and isinstance(item.get("id"), str):
            data = item.get("data")
            documents.append(Document(id=item["id"], data=data if isinstance(data, dict) else {}))
    return documents


class RestApiDocumentStore(DocumentStore):
    """Document store backed by the remote HTTP API."""

    def __init__(self, client: APIClient):
        self.client = client

    @staticmethod
    def _documents_path(collection: str) -> str:
        return f"/v1/collections/{collection}/documents"

    def _document_path(self, collection: str, doc_id: str) -> str:
        return f"{self._documents_path(collection)}/{doc_id}"

    @staticmethod
    def _query_params(query: Query) -> dict[str, Any]:
        return {"order_by": query.order_by} if query.order_by else {}

    async def create(self, collection: str, data: dict[str, Any]) -> str:
        try:
            response = await self.client.post(self._documents_path(collection), json=data)
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise RemoteWriteError(f"Failed to create document in {collection}: {e}") from e
        doc_id = payload.get("id") if isinstance(payload, dict) else None
        if not isinstance(doc_id, str) or not doc_id:
            raise RemoteWriteError(f"Store returned no id for new document in {collection}")
        return doc_id

    async def get_all(self, query: Query) -> list[Document]:
        try:
            response = await self.client.get(
                self._documents_path(query.collection), params=self._query_params(query)
            )
            return _parse_documents(response.json())
        except (httpx.HTTPError, ValueError) as e:
            raise RemoteReadError(f"Failed to read {query.collection}: {e}") from e

    async def get_one(self, collection: str, doc_id: str) -> Document | None:
        try:
            response = await self.client.get(self._document_path(collection, doc_id))
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise RemoteReadError(f"Failed to read {collection}/{doc_id}: {e}") from e
        except httpx.HTTPError as e:
            raise RemoteReadError(f"Failed to read {collection}/{doc_id}: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise RemoteReadError(f"Malformed response for {collection}/{doc_id}") from e
        data = payload.get("data") if isinstance(payload, dict) else None
        return Document(id=doc_id, data=data if isinstance(data, dict) else {})

    async def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        try:
            await self.client.patch(self._document_path(collection, doc_id), json=fields)
        except httpx.HTTPError as e:
            raise RemoteWriteError(f"Failed to update {collection}/{doc_id}: {e}") from e

    async def delete(self, collection: str, doc_id: str) -> None:
        try:
            await self.client.delete(self._document_path(collection, doc_id))
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return
            raise RemoteWriteError(f"Failed to delete {collection}/{doc_id}: {e}") from e
        except httpx.HTTPError as e:
            raise RemoteWriteError(f"Failed to delete {collection}/{doc_id}: {e}") from e

    async def subscribe(self, query: Query) -> AsyncIterator[list[Document]]:
        path = f"/v1/collections/{query.collection}/listen"
        try:
            async for payload in self.client.stream_json(path, params=self._query_params(query)):
                yield _parse_documents(payload)
        except (httpx.HTTPError, ValueError) as e:
            raise RemoteReadError(f"Live query on {query.collection} failed: {e}") from e
        raise RemoteReadError(f"Live query on {query.collection} closed by server")

    async def close(self) -> None:
        await self.client.close()
