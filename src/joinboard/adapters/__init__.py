"""Adapters module - DocumentStore and ContactDirectory implementations.

- memory: in-process store with live queries, fixed contact list
- rest_api: remote document store over HTTP
- contacts: contacts directory read from a store collection
"""

from .contacts import StoreContactDirectory
from .memory import InMemoryDocumentStore, StaticContactDirectory
from .rest_api import RestApiDocumentStore

__all__ = [
    "InMemoryDocumentStore",
    "StaticContactDirectory",
    "RestApiDocumentStore",
    "StoreContactDirectory",
]
