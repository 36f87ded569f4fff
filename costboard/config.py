"""Runtime settings read from the environment.

Env vars:
  COSTBOARD_DATA_DIR=<dir>        -> where the JSON ledgers live (default user_data)
  COSTBOARD_DB_PATH=<file>        -> project database (default <data dir>/projects.sqlite)
  COSTBOARD_PORT=8000             -> port for ``python -m costboard``
  COSTBOARD_DEBUG=1               -> Flask debug mode
  COSTBOARD_LOG_LEVEL=INFO        -> root log level
  COSTBOARD_SEED=0                -> start empty ledgers instead of the demo records
  COSTBOARD_DEFAULT_USER=<id>     -> owner used when a request carries no X-User-Id
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

TRUTHY = {"1", "true", "yes", "on"}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in TRUTHY


@dataclass
class Settings:
    data_dir: str = "user_data"
    db_path: str = os.path.join("user_data", "projects.sqlite")
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    seed: bool = True
    default_user: str | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        data_dir = os.getenv("COSTBOARD_DATA_DIR", "user_data")
        try:
            port = int(os.getenv("COSTBOARD_PORT", 8000))
        except ValueError:
            port = 8000
        return cls(
            data_dir=data_dir,
            db_path=os.getenv("COSTBOARD_DB_PATH") or os.path.join(data_dir, "projects.sqlite"),
            port=port,
            debug=_flag("COSTBOARD_DEBUG", False),
            log_level=os.getenv("COSTBOARD_LOG_LEVEL", "INFO").upper(),
            seed=_flag("COSTBOARD_SEED", True),
            default_user=os.getenv("COSTBOARD_DEFAULT_USER") or None,
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
