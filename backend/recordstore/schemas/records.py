"""Record Schemas — Pydantic models for tasks, services and users.

Invariants:
    - All record ids fit in an unsigned 64-bit integer
    - Records are frozen: tables hand them out without defensive copies
    - Strict typing at the boundary: "5" is not an int, "true" is not a bool
    - Registered passwords are 1-72 UTF-8 bytes (bcrypt input limit)
    - Names and prices carry no bounds beyond their type: price is any finite f32
    - Login requests are not length-checked; the login outcome decides

Design Decisions:
    - Same models for request bodies, responses and snapshot rows: the stored
      shape IS the wire shape, no mapping layer needed
    - User.password carries the bcrypt hash; UserPublic is what leaves the API
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recordstore.core.domain_types import (
    MAX_DURATION, MAX_PASSWORD_BYTES, MAX_PRICE, MAX_RECORD_ID, EntityKind,
)


class RecordModel(BaseModel):
    """Base for every stored record."""
    model_config = ConfigDict(frozen=True, strict=True)

    id: int = Field(ge=0, le=MAX_RECORD_ID)


class Task(RecordModel):
    name: str
    completed: bool


class Service(RecordModel):
    name: str
    price: float = Field(ge=-MAX_PRICE, le=MAX_PRICE, allow_inf_nan=False)
    duration: int = Field(ge=0, le=MAX_DURATION)


RECORD_MODELS: dict[EntityKind, type[RecordModel]] = {
    EntityKind.TASK: Task,
    EntityKind.SERVICE: Service,
}


class User(RecordModel):
    """Stored credential record. password is always a bcrypt hash."""
    username: str
    password: str


# --- Auth boundary ------------------------------------------------------------

def _check_password_bytes(v: str) -> str:
    if not v:
        raise ValueError("password cannot be empty")
    if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(
            f"password cannot be longer than {MAX_PASSWORD_BYTES} bytes",
        )
    return v


class UserRegistration(BaseModel):
    """Registration request — id and username chosen by the client."""
    model_config = ConfigDict(strict=True)

    id: int = Field(ge=0, le=MAX_RECORD_ID)
    username: str = Field(min_length=1, max_length=150)
    password: str

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty or whitespace")
        return v

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return _check_password_bytes(v)


class LoginRequest(BaseModel):
    """Login request — stateless username/password check."""
    model_config = ConfigDict(strict=True)

    username: str
    password: str

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return v.strip()


class UserPublic(BaseModel):
    """User as returned by the API — never includes the hash."""
    id: int
    username: str
