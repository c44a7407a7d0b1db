"""
Review aggregation.

A review is appended with a single atomic ``$push`` so concurrent reviews
never overwrite each other. The average is then recomputed from the
post-push list and written only while the list still has that length. If
another review lands in between, the list is re-read and the write retried,
so every request returns an average covering every stored review.
"""
from __future__ import annotations

import logging
from typing import Any

from bson import ObjectId
from pymongo.database import Database

from ..restaurants.repository import RestaurantRepository
from ..store.database import USERS, embedded, parse_object_id, store_errors
from .models import ReviewerOut, ReviewIn, ReviewWithUser

logger = logging.getLogger(__name__)


def average_rating(reviews: list[dict[str, Any]]) -> float:
    """Arithmetic mean of ``rating`` over ``reviews``; 0 for an empty list.

    Plain float division, no rounding.
    """
    if not reviews:
        return 0.0
    total = sum(float(r.get("rating") or 0) for r in reviews)
    return total / len(reviews)


class ReviewAggregationService:
    def __init__(self, database: Database) -> None:
        self._restaurants = RestaurantRepository(database)
        self._users = database[USERS]

    def add_review(self, restaurant_id: str, review: ReviewIn) -> dict[str, Any]:
        entry = embedded({
            "rating": review.rating,
            "text": review.text,
            "userId": ObjectId(review.userId),
        })
        document = self._restaurants.append(restaurant_id, "reviews", entry)
        logger.info(
            "Added review to restaurant %s (%d reviews)",
            document["_id"], len(document["reviews"]),
        )
        # Another review may land between the push and the average write;
        # recompute from the fresh list until the two agree.
        while True:
            self.refresh_average(document)
            current = self._restaurants.find_by_id(document["_id"])
            if len(current.get("reviews") or []) == len(document["reviews"]):
                return current
            document = current

    def refresh_average(self, document: dict[str, Any]) -> bool:
        """Write ``averageRating`` for the review list held in ``document``.

        Returns ``False`` if the stored list has grown since ``document`` was
        read; nothing is written then.
        """
        reviews = document.get("reviews") or []
        written = self._restaurants.set_if_length(
            document["_id"],
            {"averageRating": average_rating(reviews)},
            "reviews",
            len(reviews),
        )
        if not written:
            logger.debug("Skipped stale average for restaurant %s", document["_id"])
        return written

    def get_reviews(self, restaurant_id: str) -> list[ReviewWithUser]:
        document = self._restaurants.find_by_id(restaurant_id)
        reviews = document.get("reviews") or []
        if not reviews:
            return []

        author_ids = [parse_object_id(r.get("userId")) for r in reviews]
        wanted = list({oid for oid in author_ids if oid is not None})
        with store_errors("load review authors"):
            users = {
                u["_id"]: u
                for u in self._users.find(
                    {"_id": {"$in": wanted}},
                    {"username": 1, "profilePictureUrl": 1},
                )
            }

        result: list[ReviewWithUser] = []
        for review, author_id in zip(reviews, author_ids):
            user = users.get(author_id)
            result.append(ReviewWithUser(
                reviewText=review.get("text"),
                user=ReviewerOut(
                    username=user.get("username"),
                    profilePictureUrl=user.get("profilePictureUrl"),
                ) if user else None,
            ))
        return result
