"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - bcrypt_rounds stays inside bcrypt's accepted range (4-31)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults reproduce the original service: database.json in the working
      directory, 127.0.0.1:8080, localhost-only CORS
    - strict_updates / mask_login_failures default off: observed behavior kept,
      hardening is opt-in
"""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from recordstore.core.domain_types import DEFAULT_BCRYPT_ROUNDS


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Persistence
    snapshot_path: Path = Path("database.json")

    # Credentials
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS
    mask_login_failures: bool = False

    @field_validator("bcrypt_rounds")
    @classmethod
    def check_bcrypt_rounds(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("bcrypt_rounds must be between 4 and 31")
        return v

    # Records
    strict_updates: bool = False

    # Server
    host: str = "127.0.0.1"
    port: int = 8080

    # API
    cors_origin_regex: str = r"^(https?://localhost(:\d+)?|null)$"
    cors_max_age: int = 3600

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
