from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from ..errors import ValidationError


class Cuisine(str, Enum):
    Indian = "Indian"
    Italian = "Italian"
    Chinese = "Chinese"
    Mexican = "Mexican"
    Thai = "Thai"
    Japanese = "Japanese"
    French = "French"

    @classmethod
    def parse(cls, value: str) -> Cuisine:
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(c.value for c in cls)
            raise ValidationError(f"Unknown cuisine {value!r}, expected one of: {allowed}") from None


class Dish(BaseModel):
    name: str = Field(..., min_length=1)
    price: float | None = Field(default=None, ge=0.0)
    description: str | None = None
    isVeg: bool = False


class RestaurantIn(BaseModel):
    name: str = Field(..., min_length=1)
    cuisine: list[Cuisine] = Field(default_factory=list)
    address: str | None = None
    city: str | None = None
    rating: float = Field(default=0.0, ge=0.0, le=5.0, description="Nominal rating, set manually")
    menu: list[Dish] = Field(default_factory=list)


class RestaurantUpdate(BaseModel):
    """Partial update; only fields present in the request are applied.

    An explicit ``null`` clears ``address`` or ``city``; the other fields
    reject it.
    """

    name: str | None = Field(default=None, min_length=1)
    cuisine: list[Cuisine] | None = None
    address: str | None = None
    city: str | None = None
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    menu: list[Dish] | None = None

    @field_validator("name", "cuisine", "rating", "menu")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


# ── Request envelopes ────────────────────────────────────────────────────


class CreateRestaurantRequest(BaseModel):
    restaurant: RestaurantIn


class UpdateRestaurantRequest(BaseModel):
    updatedData: RestaurantUpdate


class AddDishRequest(BaseModel):
    dish: Dish
