"""Snapshot Schema — the single JSON document mirroring the whole store.

Invariants:
    - Top-level collections: tasks, services, users
    - Each collection maps string-encoded ids to full records
    - Missing collections default to empty (single-vertical files still load)

Design Decisions:
    - Lax parent model: JSON object keys arrive as strings and coerce to int ids,
      while the strict record models still validate every row
"""

from pydantic import BaseModel, Field

from recordstore.core.domain_types import EntityKind
from recordstore.schemas.records import Service, Task, User


class StoreSnapshot(BaseModel):
    """Full store contents at one instant."""
    tasks: dict[int, Task] = Field(default_factory=dict)
    services: dict[int, Service] = Field(default_factory=dict)
    users: dict[int, User] = Field(default_factory=dict)

    def entities(self, kind: EntityKind) -> dict:
        return getattr(self, kind.value)
