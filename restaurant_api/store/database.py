from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator

from bson import ObjectId
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..errors import PersistenceError
from .config import DEFAULT_STORE_CONFIG, StoreConfig

logger = logging.getLogger(__name__)

RESTAURANTS = "restaurants"
USERS = "users"


def connect(config: StoreConfig = DEFAULT_STORE_CONFIG) -> tuple[MongoClient, Database]:
    """Create the process-wide client and return it with its database."""
    client: MongoClient = MongoClient(
        config.database_url,
        serverSelectionTimeoutMS=config.timeout_ms,
        tz_aware=True,
    )
    database = client.get_default_database(default=config.default_database)
    logger.info("Connected to MongoDB database %r", database.name)
    return client, database


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Re-raise driver failures inside the block as ``PersistenceError``."""
    try:
        yield
    except PyMongoError as exc:
        logger.error("MongoDB error while trying to %s: %s", action, exc)
        raise PersistenceError(f"Failed to {action}: {exc}") from exc


def embedded(fields: dict[str, Any]) -> dict[str, Any]:
    """Give an embedded list entry its own id, the way subdocuments carry one."""
    return {"_id": ObjectId(), **fields}


def parse_object_id(value: Any) -> ObjectId | None:
    """Return ``value`` as an ObjectId, or ``None`` if it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def serialize_document(value: Any) -> Any:
    """Recursively convert ObjectIds to strings and datetimes to ISO text."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: serialize_document(v) for k, v in value.items()}
    if isinstance(value, list):
        return [serialize_document(v) for v in value]
    return value
