from __future__ import annotations

from fastapi import Depends, Request
from pymongo.database import Database

from ..menu.service import MenuService
from ..restaurants.repository import RestaurantRepository
from ..reviews.aggregation import ReviewAggregationService


def get_database(request: Request) -> Database:
    """Return the database handle the app was built with."""
    return request.app.state.database


def get_repository(database: Database = Depends(get_database)) -> RestaurantRepository:
    return RestaurantRepository(database)


def get_review_service(database: Database = Depends(get_database)) -> ReviewAggregationService:
    return ReviewAggregationService(database)


def get_menu_service(database: Database = Depends(get_database)) -> MenuService:
    return MenuService(database)
