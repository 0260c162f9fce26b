"""Snapshot File — JSON persistence of the whole store at a fixed path.

Invariants:
    - save() replaces the previous document as a whole (temp file + os.replace)
    - save() raises SnapshotWriteError on any OS error, never partial success
    - load() raises SnapshotReadError on missing file or malformed content
    - load_snapshot_or_empty() never raises: the service must always start

Design Decisions:
    - Write-to-temp then rename: a crash mid-write leaves the old snapshot intact
    - pydantic does the (de)serialization: the same validation rules as the API
"""

import logging
import os
from contextlib import suppress
from pathlib import Path

from pydantic import ValidationError

from recordstore.core.errors import SnapshotReadError, SnapshotWriteError
from recordstore.schemas.snapshot import StoreSnapshot

logger = logging.getLogger(__name__)


class SnapshotFile:
    """Reads and writes one StoreSnapshot document."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def save(self, snapshot: StoreSnapshot) -> None:
        """Serialize snapshot and replace the file contents."""
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                snapshot.model_dump_json(indent=2), encoding="utf-8",
            )
            os.replace(tmp_path, self.path)
        except OSError as e:
            with suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise SnapshotWriteError(str(e), str(self.path)) from e

    def load(self) -> StoreSnapshot:
        """Read and validate the document."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise SnapshotReadError("file does not exist", str(self.path)) from e
        except (OSError, UnicodeDecodeError) as e:
            raise SnapshotReadError(str(e), str(self.path)) from e
        try:
            return StoreSnapshot.model_validate_json(raw)
        except ValidationError as e:
            raise SnapshotReadError(
                f"malformed snapshot ({e.error_count()} errors)", str(self.path),
            ) from e


def load_snapshot_or_empty(snapshot_file: SnapshotFile) -> StoreSnapshot:
    """Startup loader — falls back to an empty store on any read failure."""
    try:
        snapshot = snapshot_file.load()
    except SnapshotReadError as e:
        logger.warning(
            f"Starting with an empty store: {e.message}",
            extra={"error_code": e.code, "snapshot_path": e.path},
        )
        return StoreSnapshot()
    logger.info(
        f"Loaded snapshot: {len(snapshot.tasks)} tasks, "
        f"{len(snapshot.services)} services, {len(snapshot.users)} users",
        extra={"snapshot_path": str(snapshot_file.path)},
    )
    return snapshot
