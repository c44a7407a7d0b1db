from __future__ import annotations

from bson import ObjectId
from pydantic import BaseModel, Field, field_validator


class ReviewIn(BaseModel):
    rating: float = Field(..., ge=0.0, le=5.0)
    text: str | None = None
    userId: str = Field(..., description="ObjectId of the reviewing user, as a string")

    @field_validator("userId")
    @classmethod
    def _valid_object_id(cls, value: str) -> str:
        if not ObjectId.is_valid(value):
            raise ValueError("userId must be a 24 character hex ObjectId")
        return value


class AddReviewRequest(BaseModel):
    reviewData: ReviewIn


class ReviewerOut(BaseModel):
    username: str | None = None
    profilePictureUrl: str | None = None


class ReviewWithUser(BaseModel):
    reviewText: str | None
    user: ReviewerOut | None
