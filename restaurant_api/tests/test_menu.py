from __future__ import annotations

import pytest
from bson import ObjectId

from restaurant_api.errors import NotFoundError
from restaurant_api.menu.service import MenuService
from restaurant_api.restaurants.models import Dish, RestaurantIn
from restaurant_api.restaurants.repository import RestaurantRepository

MENU = [
    Dish(name="Pasta", price=12.0, description="Penne arrabbiata", isVeg=True),
    Dish(name="Lasagne", price=14.5, description="Beef ragu"),
]


def _restaurant(database, menu=MENU):
    return str(RestaurantRepository(database).create(RestaurantIn(name="Trattoria", menu=menu))["_id"])


def test_add_dish_appends_to_menu(database):
    rid = _restaurant(database)
    restaurant = MenuService(database).add_dish(rid, Dish(name="Gelato", price=4, isVeg=True))

    assert [d["name"] for d in restaurant["menu"]] == ["Pasta", "Lasagne", "Gelato"]
    assert restaurant["menu"][-1]["isVeg"] is True
    assert isinstance(restaurant["menu"][-1]["_id"], ObjectId)


def test_remove_dish_leaves_others_unchanged(database):
    rid = _restaurant(database)
    before = RestaurantRepository(database).find_by_id(rid)["menu"]

    restaurant = MenuService(database).remove_dish(rid, "Pasta")

    assert restaurant["menu"] == [before[1]]


def test_remove_dish_twice_is_noop(database):
    rid = _restaurant(database)
    service = MenuService(database)
    once = service.remove_dish(rid, "Pasta")
    twice = service.remove_dish(rid, "Pasta")
    assert twice["menu"] == once["menu"]


def test_remove_dish_drops_every_match(database):
    rid = _restaurant(database, menu=[Dish(name="Pasta"), Dish(name="Soup"), Dish(name="Pasta")])
    restaurant = MenuService(database).remove_dish(rid, "Pasta")
    assert [d["name"] for d in restaurant["menu"]] == ["Soup"]


def test_unknown_restaurant(database):
    service = MenuService(database)
    with pytest.raises(NotFoundError):
        service.add_dish(str(ObjectId()), Dish(name="Pasta"))
    with pytest.raises(NotFoundError):
        service.remove_dish(str(ObjectId()), "Pasta")
