"""Tests for ConfigService."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from joinboard.services.config_service import ConfigService, get_config_service


@pytest.fixture()
def service():
    return ConfigService()


def test_config_dir_is_redirected(service, isolated_dirs):
    assert service.config_path == isolated_dirs / "config" / "config.json"


def test_missing_file_gives_defaults(service):
    config = service.config
    assert config.api.endpoint == "http://localhost:8080/api"
    assert config.store.backend == "remote"
    assert config.store.order_by == "priority"
    assert config.sync.reconnect_delay == 5.0
    assert config.board.max_visible_assignees == 4


def test_corrupt_file_falls_back_to_defaults(service):
    service.config_path.write_text("{not json", encoding="utf-8")

    assert service.config.store.backend == "remote"
    # The broken file is left for the user to fix
    assert service.config_path.read_text(encoding="utf-8") == "{not json"


def test_invalid_values_fall_back_to_defaults(service):
    service.config_path.write_text(json.dumps({"store": {"backend": "sqlite"}}), encoding="utf-8")
    assert service.config.store.backend == "remote"


def test_save_and_reload(service):
    service.config.store.backend = "memory"
    service.save_config()

    reloaded = ConfigService()
    assert reloaded.config.store.backend == "memory"


def test_token_env_override(service, monkeypatch):
    monkeypatch.setenv("JOINBOARD_API_TOKEN", "secret")
    assert service.config.api.token == "secret"


def test_get_by_dot_key(service):
    assert service.get("api.timeout") == 30
    assert service.get("store.nope") is None
    assert service.get("api.timeout.deeper") is None


def test_set_validates_and_saves(service):
    service.set("sync.reconnect_delay", "2.5")
    service.set("api.endpoint", "https://board.example.com/api/ ")

    saved = json.loads(service.config_path.read_text(encoding="utf-8"))
    assert saved["sync"]["reconnect_delay"] == 2.5
    assert saved["api"]["endpoint"] == "https://board.example.com/api"


def test_set_unknown_key(service):
    with pytest.raises(KeyError):
        service.set("store.unknown", "x")
    with pytest.raises(KeyError):
        service.set("nope.endpoint", "x")


def test_set_invalid_value(service):
    with pytest.raises(ValidationError):
        service.set("board.max_visible_assignees", "-1")
    assert service.config.board.max_visible_assignees == 4


def test_reset(service):
    service.set("store.backend", "memory")
    service.reset_config()

    assert not service.config_path.exists()
    assert service.config.store.backend == "remote"


def test_get_config_service_is_cached():
    assert get_config_service() is get_config_service()
