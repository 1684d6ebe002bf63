"""Storage ports for joinboard.

These abstract base classes are the boundary to external collaborators.
Implementations live in:
- joinboard.adapters.memory (in-process store, fixed contact list)
- joinboard.adapters.rest_api (remote document store over HTTP)
"""

from .repository import ContactDirectory, DocumentStore

__all__ = [
    "DocumentStore",
    "ContactDirectory",
]
