"""
Seed an empty database with demo users and restaurants.

Usage:
    python -m restaurant_api.store.seed
"""
from __future__ import annotations

from pymongo.database import Database

from ..restaurants.models import Cuisine, Dish, RestaurantIn
from ..restaurants.repository import RestaurantRepository
from ..reviews.aggregation import ReviewAggregationService
from ..reviews.models import ReviewIn
from .database import RESTAURANTS, USERS, connect, store_errors

DEMO_USERS = [
    {"username": "priya_eats", "profilePictureUrl": "https://example.com/avatars/priya.png"},
    {"username": "marco.r", "profilePictureUrl": "https://example.com/avatars/marco.png"},
]

DEMO_RESTAURANTS = [
    RestaurantIn(
        name="Spice House",
        cuisine=[Cuisine.Indian, Cuisine.Chinese],
        address="12 MG Road",
        city="Bengaluru",
        rating=4.2,
        menu=[
            Dish(name="Paneer Tikka", price=260, description="Charred cottage cheese", isVeg=True),
            Dish(name="Chilli Chicken", price=320, description="Indo-Chinese classic"),
        ],
    ),
    RestaurantIn(
        name="Pasta Palace",
        cuisine=[Cuisine.Italian],
        address="4 Church Street",
        city="Bengaluru",
        rating=4.5,
        menu=[Dish(name="Pasta", price=450, description="Penne arrabbiata", isVeg=True)],
    ),
    RestaurantIn(
        name="Sakura",
        cuisine=[Cuisine.Japanese, Cuisine.Thai],
        address="88 Linking Road",
        city="Mumbai",
        rating=3.8,
    ),
]


def seed_demo(database: Database) -> dict[str, int]:
    """Insert demo data unless the restaurants collection already has documents."""
    with store_errors("count restaurants"):
        if database[RESTAURANTS].count_documents({}) > 0:
            return {"users": 0, "restaurants": 0}
    with store_errors("create demo users"):
        user_ids = database[USERS].insert_many([dict(u) for u in DEMO_USERS]).inserted_ids

    repo = RestaurantRepository(database)
    reviews = ReviewAggregationService(database)
    for i, data in enumerate(DEMO_RESTAURANTS):
        restaurant = repo.create(data)
        author = user_ids[i % len(user_ids)]
        reviews.add_review(
            str(restaurant["_id"]),
            ReviewIn(rating=data.rating, text=f"Loved {data.name}!", userId=str(author)),
        )

    return {"users": len(user_ids), "restaurants": len(DEMO_RESTAURANTS)}


if __name__ == "__main__":
    client, db = connect()
    try:
        counts = seed_demo(db)
    finally:
        client.close()
    print(f"Seeded {counts['users']} users and {counts['restaurants']} restaurants into {db.name!r}")
