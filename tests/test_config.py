"""
Tests for configuration loading
"""
from pathlib import Path

import pytest

from peerpulse.config import load_config


REPO_CONFIG = Path(__file__).resolve().parent.parent / "config" / "peerpulse.yaml"


def test_defaults_when_file_missing(tmp_path):
    """Missing YAML file falls back to defaults"""
    settings = load_config(str(tmp_path / "missing.yaml"), environ={})
    assert settings.transport == "websocket"
    assert settings.channel_name == "presentation"
    assert settings.strict_transitions is False
    assert settings.db_retry_delay == 5.0


def test_yaml_values(tmp_path):
    """YAML values populate Settings"""
    path = tmp_path / "peerpulse.yaml"
    path.write_text(
        "mongodb_db: demo\n"
        "strict_transitions: true\n"
        "criteria:\n"
        "  - id: content\n"
        "    label: Content Quality\n",
        encoding="utf-8",
    )
    settings = load_config(str(path), environ={})
    assert settings.mongodb_db == "demo"
    assert settings.strict_transitions is True
    assert settings.criteria[0].label == "Content Quality"


def test_environment_overrides_yaml(tmp_path):
    """Environment variables win over the file"""
    path = tmp_path / "peerpulse.yaml"
    path.write_text("mongodb_uri: mongodb://file:27017\n", encoding="utf-8")
    settings = load_config(str(path), environ={
        "MONGODB_URI": "mongodb://env:27017",
        "PEERPULSE_STRICT_TRANSITIONS": "true",
        "PEERPULSE_DB_RETRY_DELAY": "1.5",
    })
    assert settings.mongodb_uri == "mongodb://env:27017"
    assert settings.strict_transitions is True
    assert settings.db_retry_delay == 1.5


def test_pusher_requires_credentials(tmp_path):
    """Pusher binding without credentials is a startup error"""
    with pytest.raises(ValueError, match="pusher_secret"):
        load_config(str(tmp_path / "missing.yaml"), environ={
            "PEERPULSE_TRANSPORT": "pusher",
            "PUSHER_APP_ID": "12345",
            "PUSHER_KEY": "test-key",
            "PUSHER_CLUSTER": "eu",
        })


def test_pusher_with_credentials(tmp_path):
    """All four credentials present -> pusher binding configured"""
    settings = load_config(str(tmp_path / "missing.yaml"), environ={
        "PEERPULSE_TRANSPORT": "pusher",
        "PUSHER_APP_ID": "12345",
        "PUSHER_KEY": "test-key",
        "PUSHER_SECRET": "test-secret",
        "PUSHER_CLUSTER": "eu",
    })
    assert settings.transport == "pusher"
    assert settings.pusher_cluster == "eu"


def test_shipped_config_file():
    """The repository config lists the four default criteria"""
    settings = load_config(str(REPO_CONFIG), environ={})
    assert [c.id for c in settings.criteria] == ["content", "presentation", "innovation", "teamwork"]
