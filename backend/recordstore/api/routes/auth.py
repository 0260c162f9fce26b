"""Auth Routes — registration and stateless login.

Invariants:
    - Registration passwords reach the store only after Pydantic validation (1-72 bytes)
    - Login passwords go straight to the outcome check, whatever their length
    - The hash never leaves the API (responses use UserPublic)
    - Login rejections keep their kind: unknown user → 401, wrong password → 400,
      unverifiable stored hash → 401 CREDENTIAL_FAULT
    - With mask_login_failures every rejection becomes one generic 401

Design Decisions:
    - No tokens or sessions: login answers "do these credentials match", nothing more
    - Outcome → error mapping lives here, the store only returns LoginOutcome
"""

import logging

from fastapi import APIRouter, Depends, status

from recordstore.config import Settings, get_settings
from recordstore.core.domain_types import LoginOutcome
from recordstore.core.errors import (
    CredentialFaultError, ErrorContext, InvalidCredentialsError,
    InvalidPasswordError, RecordStoreError, UnknownUserError,
)
from recordstore.infrastructure.record_store import RecordStore, get_store
from recordstore.schemas.records import LoginRequest, UserPublic, UserRegistration

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])

_REJECTIONS: dict[LoginOutcome, type[RecordStoreError]] = {
    LoginOutcome.UNKNOWN_USER: UnknownUserError,
    LoginOutcome.WRONG_PASSWORD: InvalidPasswordError,
    LoginOutcome.CREDENTIAL_FAULT: CredentialFaultError,
}


@router.post(
    "/register", response_model=UserPublic,
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: UserRegistration, store: RecordStore = Depends(get_store),
):
    """Register a user. 409 if the username or id is taken."""
    user = store.register(body)
    return UserPublic(id=user.id, username=user.username)


@router.post("/login")
def login(
    body: LoginRequest,
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Check credentials."""
    outcome = store.login(body.username, body.password)
    if outcome is LoginOutcome.ACCEPTED:
        logger.info("Login successful", extra={"username": body.username})
        return {"message": "Login successful", "username": body.username}

    logger.info(
        "Login rejected",
        extra={"username": body.username, "login_outcome": outcome.value},
    )
    ctx = ErrorContext(username=body.username)
    if settings.mask_login_failures:
        raise InvalidCredentialsError(ctx)
    raise _REJECTIONS[outcome](ctx)
