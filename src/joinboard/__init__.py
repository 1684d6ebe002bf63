"""Joinboard - kanban task board synchronized with a remote document store."""

__version__ = "0.1.0"
