"""Record Store concurrency — mutations serialize through one lock.

Invariants:
    - N concurrent inserts with distinct ids → snapshot holds exactly N records
    - Concurrent mixed mutations leave file and memory in agreement
    - Snapshot writes never overlap (one writer inside save() at a time)
    - Concurrent registrations of one username: exactly one wins
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from recordstore.core.domain_types import EntityKind
from recordstore.core.errors import UserConflictError
from recordstore.infrastructure.snapshot_file import SnapshotFile
from recordstore.infrastructure.record_store import RecordStore
from recordstore.schemas.records import Service, Task, UserRegistration

WORKERS = 16


def test_concurrent_inserts_all_reach_snapshot(store, snapshot_file):
    count = 200

    def insert(i):
        store.insert(EntityKind.TASK, Task(id=i, name=f"task-{i}", completed=False))

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        list(pool.map(insert, range(count)))

    persisted = snapshot_file.load()
    assert len(persisted.tasks) == count
    assert set(persisted.tasks) == set(range(count))
    assert len(store.get_all(EntityKind.TASK)) == count


def test_concurrent_mixed_mutations_match_snapshot(store, snapshot_file):
    for i in range(50):
        store.insert(
            EntityKind.SERVICE, Service(id=i, name=f"s{i}", price=1.0, duration=1),
        )

    def mutate(i):
        if i % 3 == 0:
            store.delete(EntityKind.SERVICE, i)
        elif i % 3 == 1:
            store.update(
                EntityKind.SERVICE,
                Service(id=i, name=f"s{i}-v2", price=2.0, duration=2),
            )
        else:
            store.insert(
                EntityKind.SERVICE,
                Service(id=100 + i, name=f"extra{i}", price=3.0, duration=3),
            )

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        list(pool.map(mutate, range(50)))

    assert snapshot_file.load() == store.snapshot()


class _OverlapDetectingFile(SnapshotFile):
    """SnapshotFile that records whether two saves ever ran at once."""

    def __init__(self, path):
        super().__init__(path)
        self._active = 0
        self._guard = threading.Lock()
        self.max_active = 0

    def save(self, snapshot):
        with self._guard:
            self._active += 1
            self.max_active = max(self.max_active, self._active)
        try:
            super().save(snapshot)
        finally:
            with self._guard:
                self._active -= 1


def test_snapshot_writes_never_overlap(tmp_path):
    snapshot_file = _OverlapDetectingFile(tmp_path / "db.json")
    store = RecordStore(snapshot_file, bcrypt_rounds=4)

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        list(pool.map(
            lambda i: store.insert(EntityKind.TASK, Task(id=i, name="x", completed=False)),
            range(100),
        ))

    assert snapshot_file.max_active == 1
    assert len(snapshot_file.load().tasks) == 100


def test_concurrent_registrations_single_winner(store):
    def register(i):
        try:
            store.register(
                UserRegistration(id=i, username="contested", password="pw"),
            )
            return True
        except UserConflictError:
            return False

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(register, range(8)))

    assert results.count(True) == 1
    assert len(store.snapshot().users) == 1
