"""Settings — environment overrides and bcrypt cost bounds."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from recordstore.config import Settings


def test_defaults_match_original_service(monkeypatch):
    for var in ("SNAPSHOT_PATH", "BCRYPT_ROUNDS", "LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    settings = Settings(_env_file=None)
    assert settings.snapshot_path == Path("database.json")
    assert settings.bcrypt_rounds == 12
    assert (settings.host, settings.port) == ("127.0.0.1", 8080)
    assert settings.strict_updates is False
    assert settings.mask_login_failures is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SNAPSHOT_PATH", "/var/lib/records/db.json")
    monkeypatch.setenv("STRICT_UPDATES", "true")
    monkeypatch.setenv("BCRYPT_ROUNDS", "10")
    settings = Settings(_env_file=None)
    assert settings.snapshot_path == Path("/var/lib/records/db.json")
    assert settings.strict_updates is True
    assert settings.bcrypt_rounds == 10


@pytest.mark.parametrize("rounds", [3, 32])
def test_bcrypt_rounds_out_of_range(rounds):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, bcrypt_rounds=rounds)
