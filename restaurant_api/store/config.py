from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class StoreConfig:
    database_url: str = os.getenv("DATABASE_URL", "mongodb://localhost:27017/restaurants")
    default_database: str = "restaurants"
    timeout_ms: int = int(os.getenv("DATABASE_TIMEOUT_MS", "5000"))


@dataclass(frozen=True)
class ServerConfig:
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))


DEFAULT_STORE_CONFIG = StoreConfig()
DEFAULT_SERVER_CONFIG = ServerConfig()
