"""Pytest fixtures for taskchain tests."""

import pytest

from helpers.logging import RecordingLogger


@pytest.fixture
def recording_logger() -> RecordingLogger:
    """Provide a logger that keeps every message for assertions."""
    return RecordingLogger()


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point user and machine config lookups at empty locations under tmp_path."""
    monkeypatch.setattr(
        "taskchain.config.get_user_config_path", lambda: tmp_path / "user" / "config.yml"
    )
    monkeypatch.setattr(
        "taskchain.config.get_machine_config_path", lambda: tmp_path / "site" / "config.yml"
    )
    return tmp_path
