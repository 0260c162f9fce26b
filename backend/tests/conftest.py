"""Root conftest — shared test configuration and store fixtures."""

import os

# Cheap bcrypt and no stray snapshot in the working directory
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SNAPSHOT_PATH", "test-database.json")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest

from recordstore.infrastructure.record_store import RecordStore
from recordstore.infrastructure.snapshot_file import SnapshotFile

TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
def snapshot_file(tmp_path):
    return SnapshotFile(tmp_path / "database.json")


@pytest.fixture
def store(snapshot_file):
    """Empty store writing through to a temp snapshot file."""
    return RecordStore(snapshot_file, bcrypt_rounds=TEST_BCRYPT_ROUNDS)
