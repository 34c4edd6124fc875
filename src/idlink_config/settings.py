"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. IDLINK_ENV_FILE environment variable (path to .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Lowest bcrypt work factor accepted for stored credentials
MIN_PASSWORD_HASH_ROUNDS = 10
MAX_PASSWORD_HASH_ROUNDS = 31


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / ".git").is_dir():
            return parent
        if parent == Path("/app"):
            return parent

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. IDLINK_ENV_FILE env var (absolute, or relative to the project root)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("IDLINK_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Security (MUST be set - token signing fails without it)
    jwt_secret_key: SecretStr

    # Database (POSTGRES_ prefix); DATABASE_URL_OVERRIDE wins when set
    database_url_override: str | None = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: SecretStr = SecretStr("")
    postgres_db: str = "idlink"
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # Transactions (seconds)
    tx_max_wait_seconds: float = 10.0
    tx_timeout_seconds: float = 15.0

    # JWT
    jwt_access_token_expire_hours: int = 24

    # Passwords
    password_hash_rounds: int = 12
    password_min_length: int = 8

    # OAuth adapters report expires_at on this epoch scale
    oauth_expires_at_unit: Literal["seconds", "milliseconds"] = "seconds"

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @field_validator("password_hash_rounds")
    @classmethod
    def _validate_hash_rounds(cls, v: int) -> int:
        """Reject work factors too weak to resist offline brute force."""
        if v < MIN_PASSWORD_HASH_ROUNDS:
            msg = f"password_hash_rounds must be >= {MIN_PASSWORD_HASH_ROUNDS}"
            raise ValueError(msg)
        if v > MAX_PASSWORD_HASH_ROUNDS:
            msg = f"password_hash_rounds must be <= {MAX_PASSWORD_HASH_ROUNDS}"
            raise ValueError(msg)
        return v

    @field_validator("tx_max_wait_seconds", "tx_timeout_seconds")
    @classmethod
    def _validate_positive_timeout(cls, v: float) -> float:
        if v <= 0:
            msg = "Transaction timeouts must be positive"
            raise ValueError(msg)
        return v

    # Computed properties
    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Construct the database URL from components."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.postgres_user}:"
            f"{self.postgres_password.get_secret_value()}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def database_type(self) -> str:
        """Database dialect name taken from the URL scheme."""
        return self.database_url.split(":", 1)[0].split("+", 1)[0]


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    The required jwt_secret_key must be provided via environment
    variables or a .env file.
    """
    return Settings()  # type: ignore[call-arg]  # pydantic-settings loads from env


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
