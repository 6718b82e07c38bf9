import pytest
from pydantic import ValidationError

from ethicaldrive.config import Settings


def test_invalid_log_level_rejected(monkeypatch):
    monkeypatch.setenv("ETHICALDRIVE_LOG_LEVEL", "LOUD")
    with pytest.raises(ValidationError):
        Settings()


def test_log_level_case_insensitive(monkeypatch):
    monkeypatch.setenv("ETHICALDRIVE_LOG_LEVEL", "debug")
    assert Settings().log_level == "DEBUG"


def test_defaults():
    s = Settings()
    assert s.object_vocabulary == "v2"
    assert s.keyframe_count == 4
