"""Record Tables — in-memory id-keyed tables for entities and users.

Invariants:
    - insert/update overwrite by id unconditionally (last write wins)
    - get/get_user_by_username return None on absence, never raise
    - delete of an absent id is a no-op
    - Tables are NOT thread-safe — RecordStore serializes every call

Design Decisions:
    - Plain dict storage: insertion order is incidental, callers must not rely on it
    - Records are frozen value objects, so returning them does not leak table internals
    - Pure data structures, no IO (persistence lives in infrastructure/)
"""

from typing import Generic, Iterable, TypeVar

from recordstore.core.domain_types import Credentialed, Identified

RecordT = TypeVar("RecordT", bound=Identified)
UserT = TypeVar("UserT", bound=Credentialed)


class EntityTable(Generic[RecordT]):
    """Mapping from record id to record for one entity kind."""

    def __init__(self, rows: dict[int, RecordT] | None = None):
        self._rows: dict[int, RecordT] = dict(rows or {})

    def insert(self, record: RecordT) -> None:
        self._rows[record.id] = record

    def get(self, record_id: int) -> RecordT | None:
        return self._rows.get(record_id)

    def get_all(self) -> list[RecordT]:
        return list(self._rows.values())

    def update(self, record: RecordT) -> None:
        """Full replace by id. Creates the record when the id is absent."""
        self._rows[record.id] = record

    def delete(self, record_id: int) -> bool:
        """Remove the id if present. Returns whether anything was removed."""
        return self._rows.pop(record_id, None) is not None

    def contains(self, record_id: int) -> bool:
        return record_id in self._rows

    def rows(self) -> dict[int, RecordT]:
        return dict(self._rows)

    def __len__(self) -> int:
        return len(self._rows)


class UserTable(Generic[UserT]):
    """Mapping from user id to credential record."""

    def __init__(self, rows: dict[int, UserT] | None = None):
        self._rows: dict[int, UserT] = dict(rows or {})

    def insert_user(self, user: UserT) -> None:
        self._rows[user.id] = user

    def get_user(self, user_id: int) -> UserT | None:
        return self._rows.get(user_id)

    def get_user_by_username(self, username: str) -> UserT | None:
        """First user with this username, in table iteration order.

        Duplicates can only come from snapshots written without the
        registration uniqueness check; which one wins is unspecified.
        """
        return _first_match(self._rows.values(), username)

    def rows(self) -> dict[int, UserT]:
        return dict(self._rows)

    def __len__(self) -> int:
        return len(self._rows)


def _first_match(users: Iterable[UserT], username: str) -> UserT | None:
    for user in users:
        if user.username == username:
            return user
    return None
