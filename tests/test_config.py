from datetime import timezone

import pytest
from pydantic import ValidationError

from ncom2text.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.epoch_delta == 315964800.0
    assert settings.progress_interval == 4096
    assert settings.timezone == "utc"
    assert settings.decoder == "simulated_v1"
    assert settings.json_logs is None
    assert settings.tzinfo() is timezone.utc


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("NCOM_PROGRESS_INTERVAL", "1024")
    monkeypatch.setenv("NCOM_TIMEZONE", " LOCAL ")
    monkeypatch.setenv("NCOM_DECODER", "Simulated_V1")
    monkeypatch.setenv("NCOM_LOG_LEVEL", "debug")
    monkeypatch.setenv("NCOM_JSON_LOGS", "")

    settings = Settings(_env_file=None)

    assert settings.progress_interval == 1024
    assert settings.timezone == "local"
    assert settings.tzinfo() is None
    assert settings.decoder == "simulated_v1"
    assert settings.log_level == "DEBUG"
    assert settings.json_logs is None


@pytest.mark.parametrize("field", ["progress_interval", "read_chunk_size"])
def test_rejects_non_positive_sizes(field):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: 0})
