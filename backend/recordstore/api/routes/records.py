"""Record Routes — create/read/update/delete for one entity vertical.

Invariants:
    - Request bodies are validated by Pydantic before reaching the store
    - GET of an absent id → 404; DELETE of an absent id → 204 (no-op)
    - PUT is a full replace keyed by the body id; it creates the record
      unless the store runs with strict_updates
    - Handlers are sync: Starlette runs them on its bounded worker threadpool,
      so the store's blocking lock never stalls the event loop

Design Decisions:
    - One factory for tasks and services: both verticals share every rule,
      only the record model and URL segment differ
"""

import logging

from fastapi import APIRouter, Depends, Path, Response, status

from recordstore.core.domain_types import EntityKind, MAX_RECORD_ID
from recordstore.core.errors import ResourceNotFoundError
from recordstore.infrastructure.record_store import RecordStore, get_store
from recordstore.schemas.records import RecordModel

logger = logging.getLogger(__name__)


def build_records_router(
    kind: EntityKind, model: type[RecordModel], label: str,
) -> APIRouter:
    """Router exposing the five record operations under /api/v1/{kind}."""
    router = APIRouter(prefix=f"/api/v1/{kind.value}", tags=[kind.value])

    @router.post(
        "", response_model=model, status_code=status.HTTP_201_CREATED,
    )
    def create_record(body: model, store: RecordStore = Depends(get_store)):
        store.insert(kind, body)
        logger.info(
            f"Created {label} {body.id}",
            extra={"record_kind": kind.value, "record_id": body.id},
        )
        return body

    @router.get("", response_model=list[model])
    def read_all_records(store: RecordStore = Depends(get_store)):
        return store.get_all(kind)

    @router.get("/{record_id}", response_model=model)
    def read_record(
        record_id: int = Path(ge=0, le=MAX_RECORD_ID),
        store: RecordStore = Depends(get_store),
    ):
        record = store.get(kind, record_id)
        if record is None:
            raise ResourceNotFoundError(label, record_id)
        return record

    @router.put("", response_model=model)
    def update_record(body: model, store: RecordStore = Depends(get_store)):
        if not store.update(kind, body):
            raise ResourceNotFoundError(label, body.id)
        return body

    @router.delete(
        "/{record_id}", status_code=status.HTTP_204_NO_CONTENT,
    )
    def delete_record(
        record_id: int = Path(ge=0, le=MAX_RECORD_ID),
        store: RecordStore = Depends(get_store),
    ):
        store.delete(kind, record_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
