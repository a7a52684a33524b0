"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with a local SQLite file and console logging.  In a
production deployment you should override these via environment
variables.
"""

import os
from dataclasses import dataclass
from pathlib import Path

# Directory holding run.py and pyproject.toml.
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent


def resolve_project_path(path: str) -> Path:
    """Resolve ``path`` against the project root unless it is absolute."""
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = PROJECT_ROOT / candidate
    return candidate.resolve()


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Waste Collection API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a file that receives a copy of every log record.
    # Relative paths are resolved against the project root.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path of the SQLite database.  Relative paths are resolved against
    # the project root by the ``db`` module; ``:memory:`` keeps the whole
    # store in the process for the lifetime of the application.
    database_url: str = os.getenv("DATABASE_URL", "waste_collection.db")

    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()
