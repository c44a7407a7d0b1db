from __future__ import annotations


class RestaurantAPIError(Exception):
    """Base error; ``status_code`` is the HTTP status it maps to."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(RestaurantAPIError):
    status_code = 404


class ValidationError(RestaurantAPIError):
    status_code = 422


class PersistenceError(RestaurantAPIError):
    status_code = 500
