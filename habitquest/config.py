"""
Configuration from the environment, plus logging setup.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass

DB_PATH_DEFAULT = os.path.join("data", "habitquest.db")


@dataclass(frozen=True)
class Settings:
    db_path: str
    sync_url: str
    sync_timeout: float
    log_level: str


def load_settings() -> Settings:
    try:
        timeout = float(os.getenv("HABITQUEST_SYNC_TIMEOUT", "10"))
    except ValueError:
        timeout = 10.0
    return Settings(
        db_path=os.getenv("HABITQUEST_DB_PATH", DB_PATH_DEFAULT),
        sync_url=os.getenv("HABITQUEST_SYNC_URL", "").strip(),
        sync_timeout=timeout,
        log_level=os.getenv("HABITQUEST_LOG_LEVEL", "INFO").upper(),
    )


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
