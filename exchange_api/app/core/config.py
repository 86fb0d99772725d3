"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration; in a deployment you would
at least point ``EXCHANGES_DIR`` at a persistent volume.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Exchange API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Directory holding one ``<id>.json`` file per exchange.  Relative
    # paths are resolved against the current working directory by the
    # storage layer.
    exchanges_dir: str = os.getenv("EXCHANGES_DIR", "exchanges")

    # Defaults applied to new exchanges when the creation request does
    # not specify them.
    default_user_max: int = int(os.getenv("DEFAULT_USER_MAX", "2"))
    default_assignment_factor: float = float(os.getenv("DEFAULT_ASSIGNMENT_FACTOR", "0.5"))

    # Comma‑separated list of origins for the CORS middleware.  ``*``
    # allows any origin, which matches how the web frontend is usually
    # hosted on a different port during development.
    allowed_origins: List[str] = field(
        default_factory=lambda: _split_origins(os.getenv("ALLOWED_ORIGINS", "*"))
    )

    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "7669"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at import time, environment variables should be set
# before importing this module.
settings = Settings()
