from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.database import Database

from .errors import RestaurantAPIError, ValidationError
from .menu.service import MenuService
from .restaurants.models import (
    AddDishRequest,
    CreateRestaurantRequest,
    Cuisine,
    UpdateRestaurantRequest,
)
from .restaurants.repository import RestaurantRepository
from .reviews.aggregation import ReviewAggregationService
from .reviews.models import AddReviewRequest
from .store.config import DEFAULT_SERVER_CONFIG, DEFAULT_STORE_CONFIG, StoreConfig
from .store.database import connect, serialize_document
from .store.dependencies import get_menu_service, get_repository, get_review_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(message: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": message})


# ── Public endpoints ─────────────────────────────────────────────────────


@router.get("/")
def root() -> dict[str, str]:
    return {"message": "Restaurant API is running"}


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Restaurants ──────────────────────────────────────────────────────────


@router.post("/restaurants", status_code=201)
def create_restaurant(
    body: CreateRestaurantRequest,
    repo: RestaurantRepository = Depends(get_repository),
) -> dict[str, Any]:
    restaurant = repo.create(body.restaurant)
    return {
        "message": "Created Restaurant Successfully",
        "restaurant": serialize_document(restaurant),
    }


@router.get("/restaurants/search")
def search_restaurants_by_location(
    location: str,
    repo: RestaurantRepository = Depends(get_repository),
) -> Any:
    restaurant = repo.find_by_city(location)
    if restaurant is None:
        return _not_found("No Restaurants Found")
    return {"message": "Restaurant Found", "restaurants": serialize_document(restaurant)}


@router.get("/restaurants/cuisine/{cuisineType}")
def read_restaurants_by_cuisine(
    cuisineType: str,
    repo: RestaurantRepository = Depends(get_repository),
) -> Any:
    restaurants = repo.find_by_cuisine(Cuisine.parse(cuisineType))
    if not restaurants:
        return _not_found("No Restaurants Found for cuisine")
    return {
        "message": "Restaurants with Cuisine Found",
        "restaurants": serialize_document(restaurants),
    }


@router.get("/restaurants/rating/{minRating}")
def filter_restaurants_by_rating(
    minRating: float,
    repo: RestaurantRepository = Depends(get_repository),
) -> Any:
    restaurants = repo.find_by_min_rating(minRating)
    if not restaurants:
        return _not_found("No Restaurants Found")
    return {"message": "Restaurants Found", "restaurants": serialize_document(restaurants)}


@router.get("/restaurants/{name}")
def read_restaurant(
    name: str,
    repo: RestaurantRepository = Depends(get_repository),
) -> Any:
    restaurant = repo.find_by_name(name)
    if restaurant is None:
        return _not_found("Restaurant Not Found")
    return {"message": "Restaurant Found", "restaurant": serialize_document(restaurant)}


@router.get("/restaurants")
def read_all_restaurants(repo: RestaurantRepository = Depends(get_repository)) -> Any:
    restaurants = repo.find_all()
    if not restaurants:
        return _not_found("No Restaurants Found")
    return {"message": "Restaurants Found", "restaurants": serialize_document(restaurants)}


@router.post("/restaurants/{restaurantId}")
def update_restaurant(
    restaurantId: str,
    body: UpdateRestaurantRequest,
    repo: RestaurantRepository = Depends(get_repository),
) -> dict[str, Any]:
    restaurant = repo.update_by_id(restaurantId, body.updatedData)
    return {"message": "Restaurant Updated", "restaurant": serialize_document(restaurant)}


@router.delete("/restaurants/{restaurantId}")
def delete_restaurant(
    restaurantId: str,
    repo: RestaurantRepository = Depends(get_repository),
) -> dict[str, Any]:
    remaining = repo.delete_by_id(restaurantId)
    return {"message": "Restaurant Deleted", "restaurant": serialize_document(remaining)}


# ── Menu ─────────────────────────────────────────────────────────────────


@router.post("/restaurants/{restaurantId}/menu", status_code=201)
def add_dish_to_menu(
    restaurantId: str,
    body: AddDishRequest,
    menu: MenuService = Depends(get_menu_service),
) -> dict[str, Any]:
    restaurant = menu.add_dish(restaurantId, body.dish)
    return {"message": "Dish Added", "restaurant": serialize_document(restaurant)}


@router.delete("/restaurants/{restaurantId}/menu/{dishName}")
def remove_dish_from_menu(
    restaurantId: str,
    dishName: str,
    menu: MenuService = Depends(get_menu_service),
) -> dict[str, Any]:
    restaurant = menu.remove_dish(restaurantId, dishName)
    return {"message": "Deleted Dish from menu", "restaurant": serialize_document(restaurant)}


# ── Reviews ──────────────────────────────────────────────────────────────


@router.post("/restaurants/{restaurantId}/reviews", status_code=201)
def add_restaurant_review(
    restaurantId: str,
    body: AddReviewRequest,
    reviews: ReviewAggregationService = Depends(get_review_service),
) -> dict[str, Any]:
    restaurant = reviews.add_review(restaurantId, body.reviewData)
    return {"message": "Review Added", "restaurant": serialize_document(restaurant)}


@router.get("/restaurants/{restaurantId}/reviews")
def get_user_reviews_for_restaurant(
    restaurantId: str,
    reviews: ReviewAggregationService = Depends(get_review_service),
) -> dict[str, Any]:
    found = reviews.get_reviews(restaurantId)
    return {"message": "Reviews Found", "reviews": [r.model_dump() for r in found]}


# ── Error mapping ────────────────────────────────────────────────────────


def _describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


async def handle_api_error(request: Request, exc: RestaurantAPIError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await handle_api_error(request, ValidationError(_describe_validation_errors(exc.errors())))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


# ── Application factory ──────────────────────────────────────────────────


def create_app(
    database: Database | None = None,
    store_config: StoreConfig = DEFAULT_STORE_CONFIG,
) -> FastAPI:
    """Build the API around ``database``.

    When no database is given, a client is created from ``store_config`` at
    startup and closed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        client = None
        if app.state.database is None:
            client, app.state.database = connect(store_config)
        try:
            yield
        finally:
            if client is not None:
                client.close()
                app.state.database = None

    app = FastAPI(title="Restaurant API", version="1.0.0", lifespan=lifespan)
    app.state.database = database
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RestaurantAPIError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host=DEFAULT_SERVER_CONFIG.host, port=DEFAULT_SERVER_CONFIG.port)
