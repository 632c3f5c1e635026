"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts with a local SQLite file and a handful of demo classes.  In
a production deployment override these via environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _as_bool(value: str) -> bool:
    return value.lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Gym Membership API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _as_bool(os.getenv("DEBUG", "false"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database.  If a relative path is provided, it
    # is resolved relative to the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "gym.db")

    # Reconnect policy for the shared database handle.  A failed connect
    # is retried ``db_connect_retries`` times in total, sleeping
    # ``db_connect_backoff`` seconds before the second attempt and
    # doubling the delay after each further failure.
    db_connect_retries: int = int(os.getenv("DB_CONNECT_RETRIES", "3"))
    db_connect_backoff: float = float(os.getenv("DB_CONNECT_BACKOFF", "0.5"))

    # Insert a few demo classes when the catalog is empty.  Classes are
    # read-only through the API, so a fresh database would otherwise
    # have nothing to enroll in.
    seed_demo_data: bool = _as_bool(os.getenv("SEED_DEMO_DATA", "true"))

    # Comma‑separated list of origins allowed to call the API from the
    # browser front end.  ``*`` allows any origin.
    cors_origins: List[str] = field(
        default_factory=lambda: [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]
    )

    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "3000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
