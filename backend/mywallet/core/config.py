"""Runtime settings built once from the environment and passed down."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from mywallet.core.exceptions import ConfigurationError

LOCALHOST_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]

DEFAULT_DATABASE_URL = "file://./data"
DEFAULT_PORT = 5000


def load_env_file(env_path: Path | None = None) -> None:
    """Load variables from the project's .env file without overriding real ones."""
    # backend/mywallet/core/config.py -> backend -> project root
    path = env_path or Path(__file__).resolve().parents[3] / ".env"
    load_dotenv(path)


@dataclass(frozen=True)
class Settings:
    """Application settings."""

    database_url: str = DEFAULT_DATABASE_URL
    port: int = DEFAULT_PORT
    environment: str = "development"
    cors_origins: list[str] = field(default_factory=lambda: list(LOCALHOST_ORIGINS))
    session_ttl_minutes: Optional[int] = None
    bcrypt_rounds: int = 10
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables.

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed
        """
        env = os.environ if environ is None else environ

        origins = env.get("CORS_ORIGINS")
        cors_origins = (
            [origin.strip() for origin in origins.split(",") if origin.strip()]
            if origins
            else list(LOCALHOST_ORIGINS)
        )

        return cls(
            database_url=env.get("DATABASE_URL", DEFAULT_DATABASE_URL),
            port=_parse_int(env, "PORT", DEFAULT_PORT),
            environment=env.get("ENVIRONMENT", "development"),
            cors_origins=cors_origins,
            session_ttl_minutes=_parse_int(env, "SESSION_TTL_MINUTES", 0) or None,
            bcrypt_rounds=_parse_int(env, "BCRYPT_ROUNDS", 10),
            log_level=env.get("LOG_LEVEL", "INFO"),
        )


def _parse_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}")
