from __future__ import annotations

import pytest
from bson import ObjectId

from restaurant_api.errors import NotFoundError
from restaurant_api.restaurants.models import Cuisine, Dish, RestaurantIn, RestaurantUpdate
from restaurant_api.restaurants.repository import RestaurantRepository


def _create(repo, name, **fields):
    return repo.create(RestaurantIn(name=name, **fields))


def test_create_applies_defaults(database):
    repo = RestaurantRepository(database)
    doc = _create(repo, "Spice House", cuisine=[Cuisine.Indian], city="Pune")

    assert isinstance(doc["_id"], ObjectId)
    stored = database["restaurants"].find_one({"_id": doc["_id"]})
    assert stored["name"] == "Spice House"
    assert stored["cuisine"] == ["Indian"]
    assert stored["rating"] == 0.0
    assert stored["averageRating"] == 0.0
    assert stored["reviews"] == []
    assert stored["menu"] == []
    assert "createdAt" in stored and "updatedAt" in stored


def test_create_gives_each_dish_an_id(database):
    repo = RestaurantRepository(database)
    doc = _create(repo, "Pasta Palace", menu=[Dish(name="Pasta", price=9.5), Dish(name="Tiramisu", price=5)])
    assert all(isinstance(d["_id"], ObjectId) for d in doc["menu"])
    assert [d["name"] for d in doc["menu"]] == ["Pasta", "Tiramisu"]


def test_find_by_city_returns_first_match_or_none(database):
    repo = RestaurantRepository(database)
    _create(repo, "A", city="Delhi")
    _create(repo, "B", city="Delhi")

    assert repo.find_by_city("Delhi")["name"] == "A"
    assert repo.find_by_city("Chennai") is None


def test_find_by_name(database):
    repo = RestaurantRepository(database)
    _create(repo, "Sakura")
    assert repo.find_by_name("Sakura")["name"] == "Sakura"
    assert repo.find_by_name("Nowhere") is None


def test_find_by_cuisine_matches_any_tag(database):
    repo = RestaurantRepository(database)
    _create(repo, "Fusion", cuisine=[Cuisine.Thai, Cuisine.Japanese])
    _create(repo, "Trattoria", cuisine=[Cuisine.Italian])

    assert [r["name"] for r in repo.find_by_cuisine(Cuisine.Japanese)] == ["Fusion"]
    assert repo.find_by_cuisine(Cuisine.French) == []


def test_find_by_min_rating_includes_threshold(database):
    repo = RestaurantRepository(database)
    for name, rating in [("three", 3), ("four", 4), ("five", 5)]:
        _create(repo, name, rating=rating)

    names = {r["name"] for r in repo.find_by_min_rating(4)}
    assert names == {"four", "five"}


def test_update_by_id_merges_sent_fields_only(database):
    repo = RestaurantRepository(database)
    doc = _create(repo, "Old Name", city="Goa", rating=2)

    updated = repo.update_by_id(str(doc["_id"]), RestaurantUpdate(name="New Name"))

    assert updated["name"] == "New Name"
    assert updated["city"] == "Goa"
    assert updated["rating"] == 2
    assert updated["_id"] == doc["_id"]


def test_update_ignores_derived_fields(database):
    repo = RestaurantRepository(database)
    doc = _create(repo, "Guarded")

    changes = RestaurantUpdate.model_validate({"rating": 3, "averageRating": 5, "reviews": [{"rating": 1}]})
    updated = repo.update_by_id(str(doc["_id"]), changes)

    assert updated["rating"] == 3
    assert updated["averageRating"] == 0.0
    assert updated["reviews"] == []


def test_update_unknown_id_raises_not_found(database):
    repo = RestaurantRepository(database)
    with pytest.raises(NotFoundError):
        repo.update_by_id(str(ObjectId()), RestaurantUpdate(name="x"))


def test_malformed_id_raises_not_found(database):
    repo = RestaurantRepository(database)
    with pytest.raises(NotFoundError):
        repo.find_by_id("not-an-object-id")


def test_delete_by_id_returns_remaining(database):
    repo = RestaurantRepository(database)
    keep = _create(repo, "Keep")
    drop = _create(repo, "Drop")

    remaining = repo.delete_by_id(str(drop["_id"]))

    assert [r["_id"] for r in remaining] == [keep["_id"]]


def test_delete_unknown_id_raises_not_found(database):
    repo = RestaurantRepository(database)
    _create(repo, "Survivor")
    with pytest.raises(NotFoundError):
        repo.delete_by_id(str(ObjectId()))
    assert len(repo.find_all()) == 1


def test_set_if_length_skips_when_list_changed(database):
    repo = RestaurantRepository(database)
    doc = _create(repo, "Guarded")
    repo.append(str(doc["_id"]), "reviews", {"rating": 5})

    assert repo.set_if_length(doc["_id"], {"averageRating": 1.0}, "reviews", 0) is False
    assert repo.set_if_length(doc["_id"], {"averageRating": 5.0}, "reviews", 1) is True
    assert repo.find_by_id(doc["_id"])["averageRating"] == 5.0
