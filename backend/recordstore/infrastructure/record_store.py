"""Record Store — task, service and user tables behind one exclusive lock.

Invariants:
    - Every table read and write happens while holding self._lock
    - Every mutation saves the full store before the lock is released, so the
      snapshot file only ever reflects states the store actually held
    - A failed snapshot write is logged; the in-memory mutation stands
    - An unexpected exception inside a critical section marks the store
      corrupted; every later call raises StoreCorruptedError
    - Business outcomes (absent record, bad credentials) are return values, not exceptions
    - A table only ever holds records of its own kind

Design Decisions:
    - One threading.Lock, readers included: correctness over read throughput
    - bcrypt runs outside the lock: hashing is slow and touches no shared state
    - Explicitly owned instance (built in the FastAPI lifespan, kept on app.state)
      rather than a module-level singleton
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from fastapi import Request

from recordstore.core.credentials import hash_password, verify_password
from recordstore.core.domain_types import (
    DEFAULT_BCRYPT_ROUNDS, EntityKind, LoginOutcome,
)
from recordstore.core.errors import (
    CredentialFaultError, RecordStoreError, SnapshotWriteError,
    StoreCorruptedError, UserConflictError, ErrorContext,
)
from recordstore.core.tables import EntityTable, UserTable
from recordstore.infrastructure.snapshot_file import (
    SnapshotFile, load_snapshot_or_empty,
)
from recordstore.schemas.records import (
    RECORD_MODELS, RecordModel, User, UserRegistration,
)
from recordstore.schemas.snapshot import StoreSnapshot

logger = logging.getLogger(__name__)


class RecordStore:
    """Concurrent record store with write-through snapshot persistence."""

    def __init__(
        self,
        snapshot_file: SnapshotFile,
        snapshot: StoreSnapshot | None = None,
        bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
        strict_updates: bool = False,
    ):
        if snapshot is None:
            snapshot = StoreSnapshot()
        self._snapshot_file = snapshot_file
        self._bcrypt_rounds = bcrypt_rounds
        self._strict_updates = strict_updates
        self._tables: dict[EntityKind, EntityTable] = {
            kind: EntityTable(snapshot.entities(kind)) for kind in EntityKind
        }
        self._users: UserTable[User] = UserTable(snapshot.users)
        self._lock = threading.Lock()
        self._corrupted = False

    @classmethod
    def open(
        cls,
        snapshot_file: SnapshotFile,
        bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
        strict_updates: bool = False,
    ) -> "RecordStore":
        """Build a store from the snapshot file, or empty if it is unusable."""
        return cls(
            snapshot_file,
            load_snapshot_or_empty(snapshot_file),
            bcrypt_rounds=bcrypt_rounds,
            strict_updates=strict_updates,
        )

    @property
    def corrupted(self) -> bool:
        return self._corrupted

    # ─── Entity operations ───────────────────────────────────────

    def insert(self, kind: EntityKind, record: RecordModel) -> None:
        _check_kind(kind, record)
        with self._exclusive():
            self._tables[kind].insert(record)
            self._persist()

    def get(self, kind: EntityKind, record_id: int) -> RecordModel | None:
        with self._exclusive():
            return self._tables[kind].get(record_id)

    def get_all(self, kind: EntityKind) -> list[RecordModel]:
        with self._exclusive():
            return self._tables[kind].get_all()

    def update(self, kind: EntityKind, record: RecordModel) -> bool:
        """Full replace by id. Returns False only when strict and the id is absent."""
        _check_kind(kind, record)
        with self._exclusive():
            table = self._tables[kind]
            if self._strict_updates and not table.contains(record.id):
                return False
            table.update(record)
            self._persist()
            return True

    def delete(self, kind: EntityKind, record_id: int) -> None:
        """Remove the id. An absent id is a no-op (nothing changed, nothing written)."""
        with self._exclusive():
            removed = self._tables[kind].delete(record_id)
            if removed:
                self._persist()

    # ─── User operations ─────────────────────────────────────────

    def insert_user(self, user: User) -> None:
        with self._exclusive():
            self._users.insert_user(user)
            self._persist()

    def get_user_by_username(self, username: str) -> User | None:
        with self._exclusive():
            return self._users.get_user_by_username(username)

    def register(self, registration: UserRegistration) -> User:
        """Hash the password and store the user. Raises UserConflictError."""
        user = User(
            id=registration.id,
            username=registration.username,
            password=hash_password(registration.password, self._bcrypt_rounds),
        )
        with self._exclusive():
            ctx = ErrorContext(username=user.username, record_id=user.id)
            if self._users.get_user_by_username(user.username) is not None:
                raise UserConflictError("username", ctx)
            if self._users.get_user(user.id) is not None:
                raise UserConflictError("id", ctx)
            self._users.insert_user(user)
            self._persist()
        logger.info(
            f"Registered user {user.id}", extra={"username": user.username},
        )
        return user

    def login(self, username: str, password: str) -> LoginOutcome:
        """Stateless credential check — never raises for rejections."""
        user = self.get_user_by_username(username)
        if user is None:
            return LoginOutcome.UNKNOWN_USER
        try:
            matched = verify_password(password, user.password)
        except CredentialFaultError:
            logger.warning(
                f"Stored hash for user {user.id} is malformed",
                extra={"username": username},
            )
            return LoginOutcome.CREDENTIAL_FAULT
        return LoginOutcome.ACCEPTED if matched else LoginOutcome.WRONG_PASSWORD

    # ─── Snapshot ────────────────────────────────────────────────

    def snapshot(self) -> StoreSnapshot:
        """Consistent copy of every table."""
        with self._exclusive():
            return self._build_snapshot()

    def flush(self) -> bool:
        """Write the current state. Used on shutdown; never raises on I/O failure."""
        with self._exclusive():
            return self._persist()

    # ─── Internals ───────────────────────────────────────────────

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        """Critical section. Poisons the store on unexpected exceptions."""
        with self._lock:
            if self._corrupted:
                raise StoreCorruptedError()
            try:
                yield
            except RecordStoreError:
                raise
            except Exception:
                self._corrupted = True
                logger.critical(
                    "Record store corrupted by a failed critical section",
                    exc_info=True,
                    extra={"error_code": "STORE_CORRUPTED"},
                )
                raise

    def _build_snapshot(self) -> StoreSnapshot:
        return StoreSnapshot.model_construct(
            tasks=self._tables[EntityKind.TASK].rows(),
            services=self._tables[EntityKind.SERVICE].rows(),
            users=self._users.rows(),
        )

    def _persist(self) -> bool:
        """Write-through. Caller holds the lock."""
        try:
            self._snapshot_file.save(self._build_snapshot())
        except SnapshotWriteError as e:
            logger.warning(
                f"Snapshot not saved, in-memory state kept: {e.message}",
                extra={"error_code": e.code, "snapshot_path": e.path},
            )
            return False
        return True


def _check_kind(kind: EntityKind, record: RecordModel) -> None:
    """Reject a record of the wrong model before it reaches the lock."""
    expected = RECORD_MODELS[kind]
    if not isinstance(record, expected):
        raise TypeError(
            f"{kind.value} table holds {expected.__name__}, "
            f"got {type(record).__name__}"
        )


def get_store(request: Request) -> RecordStore:
    """FastAPI dependency — the store built by the lifespan."""
    store = getattr(request.app.state, "record_store", None)
    if store is None:
        raise RuntimeError("Record store not initialized")
    return store
