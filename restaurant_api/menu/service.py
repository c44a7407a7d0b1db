from __future__ import annotations

import logging
from typing import Any

from pymongo.database import Database

from ..restaurants.models import Dish
from ..restaurants.repository import RestaurantRepository
from ..store.database import embedded

logger = logging.getLogger(__name__)


class MenuService:
    """Add and remove dishes on a restaurant's embedded menu."""

    def __init__(self, database: Database) -> None:
        self._restaurants = RestaurantRepository(database)

    def add_dish(self, restaurant_id: str, dish: Dish) -> dict[str, Any]:
        document = self._restaurants.append(restaurant_id, "menu", embedded(dish.model_dump()))
        logger.info("Added dish %r to restaurant %s", dish.name, document["_id"])
        return document

    def remove_dish(self, restaurant_id: str, dish_name: str) -> dict[str, Any]:
        """Remove every dish called ``dish_name``; a no-op when none match."""
        return self._restaurants.remove_matching(restaurant_id, "menu", {"name": dish_name})
