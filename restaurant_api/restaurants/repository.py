from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.database import Database

from ..errors import NotFoundError
from ..store.database import RESTAURANTS, embedded, parse_object_id, store_errors
from .models import Cuisine, RestaurantIn, RestaurantUpdate

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Restaurant Not Found"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class RestaurantRepository:
    """Restaurant-shaped operations over the ``restaurants`` collection."""

    def __init__(self, database: Database) -> None:
        self._collection = database[RESTAURANTS]

    def _object_id(self, restaurant_id: str | ObjectId) -> ObjectId:
        oid = parse_object_id(restaurant_id)
        if oid is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return oid

    # ── Create ───────────────────────────────────────────────────────────

    def create(self, data: RestaurantIn) -> dict[str, Any]:
        now = _now()
        document = data.model_dump(mode="json")
        document["menu"] = [embedded(dish) for dish in document["menu"]]
        document.update(averageRating=0.0, reviews=[], createdAt=now, updatedAt=now)
        with store_errors("create restaurant"):
            result = self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("Created restaurant %s (%s)", result.inserted_id, data.name)
        return document

    # ── Read ─────────────────────────────────────────────────────────────

    def find_by_id(self, restaurant_id: str | ObjectId) -> dict[str, Any]:
        oid = self._object_id(restaurant_id)
        with store_errors("load restaurant"):
            document = self._collection.find_one({"_id": oid})
        if document is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return document

    def find_by_city(self, location: str) -> dict[str, Any] | None:
        with store_errors("search restaurants by city"):
            return self._collection.find_one({"city": location})

    def find_by_name(self, name: str) -> dict[str, Any] | None:
        with store_errors("read restaurant"):
            return self._collection.find_one({"name": name})

    def find_all(self) -> list[dict[str, Any]]:
        with store_errors("read restaurants"):
            return list(self._collection.find())

    def find_by_cuisine(self, cuisine: Cuisine) -> list[dict[str, Any]]:
        with store_errors("read restaurants by cuisine"):
            return list(self._collection.find({"cuisine": cuisine.value}))

    def find_by_min_rating(self, threshold: float) -> list[dict[str, Any]]:
        with store_errors("filter restaurants by rating"):
            return list(self._collection.find({"rating": {"$gte": threshold}}))

    # ── Update / delete ──────────────────────────────────────────────────

    def update_by_id(self, restaurant_id: str, changes: RestaurantUpdate) -> dict[str, Any]:
        oid = self._object_id(restaurant_id)
        fields = changes.model_dump(mode="json", exclude_unset=True)
        if "menu" in fields:
            fields["menu"] = [embedded(dish) for dish in fields["menu"]]
        fields["updatedAt"] = _now()
        with store_errors("update restaurant"):
            document = self._collection.find_one_and_update(
                {"_id": oid},
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        if document is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return document

    def delete_by_id(self, restaurant_id: str) -> list[dict[str, Any]]:
        """Delete a restaurant and return the restaurants that remain."""
        oid = self._object_id(restaurant_id)
        with store_errors("delete restaurant"):
            result = self._collection.delete_one({"_id": oid})
        if result.deleted_count == 0:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        logger.info("Deleted restaurant %s", oid)
        return self.find_all()

    # ── Embedded list primitives ─────────────────────────────────────────

    def append(self, restaurant_id: str, field: str, item: dict[str, Any]) -> dict[str, Any]:
        """Atomically push ``item`` onto an embedded list; return the new document."""
        oid = self._object_id(restaurant_id)
        with store_errors(f"add to restaurant {field}"):
            document = self._collection.find_one_and_update(
                {"_id": oid},
                {"$push": {field: item}, "$set": {"updatedAt": _now()}},
                return_document=ReturnDocument.AFTER,
            )
        if document is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return document

    def remove_matching(self, restaurant_id: str, field: str, criteria: dict[str, Any]) -> dict[str, Any]:
        """Atomically pull every embedded entry matching ``criteria``."""
        oid = self._object_id(restaurant_id)
        with store_errors(f"remove from restaurant {field}"):
            document = self._collection.find_one_and_update(
                {"_id": oid},
                {"$pull": {field: criteria}, "$set": {"updatedAt": _now()}},
                return_document=ReturnDocument.AFTER,
            )
        if document is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return document

    def set_if_length(
        self,
        restaurant_id: str | ObjectId,
        fields: dict[str, Any],
        list_field: str,
        length: int,
    ) -> bool:
        """Set ``fields`` only while ``list_field`` still holds ``length`` entries.

        Returns ``False`` when the list changed in the meantime and nothing
        was written.
        """
        oid = self._object_id(restaurant_id)
        with store_errors("update restaurant"):
            result = self._collection.update_one(
                {"_id": oid, list_field: {"$size": length}},
                {"$set": {**fields, "updatedAt": _now()}},
            )
        return result.matched_count == 1
