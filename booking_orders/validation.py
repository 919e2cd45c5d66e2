"""Validation helpers for mutation argument checks.

Eliminates repeated validation boilerplate across the order operations.
"""

from typing import Any

from .errors import InvalidArgumentError

MIN_RATING = 1
MAX_RATING = 5


def require_id(value: Any, name: str) -> None:
    """Require a non-empty identifier (string or int)."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidArgumentError(f"{name} is required")


def require_text(value: Any, name: str) -> None:
    """Require a non-blank string."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{name} must not be empty")


def require_rating(rating: Any) -> None:
    """Require an integer rating between MIN_RATING and MAX_RATING."""
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidArgumentError(f"rating must be an integer, got {rating!r}")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidArgumentError(
            f"rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}"
        )