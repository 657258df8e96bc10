from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppConfig:
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT") or 8000)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    listing_limit: int = 6
    check_review_restaurant: bool = _env_flag("CHECK_REVIEW_RESTAURANT")


DEFAULT_APP_CONFIG = AppConfig()
