from __future__ import annotations

import uuid

import mongomock
import pytest
from fastapi.testclient import TestClient

from restaurant_api.app import create_app


@pytest.fixture
def database():
    return mongomock.MongoClient()[f"test_{uuid.uuid4().hex}"]


@pytest.fixture
def client(database):
    return TestClient(create_app(database))


@pytest.fixture
def users(database):
    """Two reviewers, keyed by username, holding their ObjectId strings."""
    result = database["users"].insert_many([
        {"username": "asha", "profilePictureUrl": "https://img.example/asha.png", "email": "asha@example.com"},
        {"username": "ben", "profilePictureUrl": "https://img.example/ben.png", "email": "ben@example.com"},
    ])
    return {"asha": str(result.inserted_ids[0]), "ben": str(result.inserted_ids[1])}
