"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Record and user ids are ints in the unsigned 64-bit range (MAX_RECORD_ID)
    - Entity kinds and login outcomes encoded as Enums — no raw string matching
    - Identified / Credentialed describe the only record fields tables rely on

Design Decisions:
    - str Enums: EntityKind values double as snapshot collection names and URL segments
"""

from enum import Enum
from typing import Protocol


# ─── Limits ──────────────────────────────────────────────────────

MAX_RECORD_ID = 2**64 - 1
MAX_DURATION = 2**32 - 1
MAX_PRICE = 3.4028235e38  # largest finite f32
MAX_PASSWORD_BYTES = 72  # bcrypt ignores (or rejects) anything longer
DEFAULT_BCRYPT_ROUNDS = 12


# ─── Enums ───────────────────────────────────────────────────────

class EntityKind(str, Enum):
    """Entity verticals held by the store — value is the collection name."""
    TASK = "tasks"
    SERVICE = "services"


class LoginOutcome(str, Enum):
    """Result of a login attempt. Rejections stay distinguishable."""
    ACCEPTED = "accepted"
    UNKNOWN_USER = "unknown_user"
    WRONG_PASSWORD = "wrong_password"
    CREDENTIAL_FAULT = "credential_fault"


# ─── Structural contracts ────────────────────────────────────────

class Identified(Protocol):
    """Anything stored in an entity table."""
    @property
    def id(self) -> int: ...


class Credentialed(Protocol):
    """Anything stored in the user table."""
    @property
    def id(self) -> int: ...
    @property
    def username(self) -> str: ...
    @property
    def password(self) -> str: ...
