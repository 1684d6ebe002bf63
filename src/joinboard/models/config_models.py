"""Configuration models for joinboard."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class APIConfig(BaseModel):
    """Remote store API configuration."""

    endpoint: str = Field(default="http://localhost:8080/api")
    timeout: int = Field(default=30)
    retry: int = Field(default=3)
    token: str | None = Field(default=None, description="Bearer token, if the store needs one")

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Strip whitespace and the trailing slash."""
        if not v or not v.strip():
            raise ValueError("endpoint cannot be empty")
        return v.strip().rstrip("/")


class StoreConfig(BaseModel):
    """Which document store backs the board and how it is queried."""

    backend: Literal["remote", "memory"] = Field(default="remote")
    tasks_collection: str = Field(default="tasks")
    contacts_collection: str = Field(default="contacts")
    order_by: str = Field(default="priority")


class SyncConfig(BaseModel):
    """Live query configuration."""

    reconnect_delay: float | None = Field(
        default=5.0, description="Seconds before re-opening a failed live query; None stops"
    )


class BoardConfig(BaseModel):
    """Board presentation limits."""

    max_visible_assignees: int = Field(default=4, ge=0)


class AppConfig(BaseModel):
    """Main joinboard configuration."""

    api: APIConfig = Field(default_factory=APIConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)
    board: BoardConfig = Field(default_factory=BoardConfig)
