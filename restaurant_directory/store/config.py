from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class StoreConfig:
    url: str = os.getenv("MONGO_URL", "mongodb://localhost:27017/hotel")
    database: str = os.getenv("MONGO_DB", "hotel")
    server_selection_timeout_ms: int = 5000

    restaurants_collection: str = "restaurants"
    reviews_collection: str = "reviews"
    contacts_collection: str = "contactus"


DEFAULT_STORE_CONFIG = StoreConfig()
