"""
Validators shared by the entities and the CRUD layer: required text fields,
the review rating range and the average rating aggregate.
"""

from typing import Iterable, Optional

from booklibrary.core.exceptions import BlankFieldError, InvalidRatingError

MIN_RATING = 1
MAX_RATING = 5


def require_non_blank(value: Optional[str], field_name: str) -> str:
    """
    Checks that a required text field has visible content.

    Args:
        value (Optional[str]): Value to check.
        field_name (str): Name reported in the error.

    Returns:
        str: The value, unchanged.

    Raises:
        BlankFieldError: If the value is None, empty or whitespace only.
    """
    if value is None or not value.strip():
        raise BlankFieldError(field_name)
    return value


def validate_rating(rating: int) -> int:
    """Returns the rating if it lies in [MIN_RATING, MAX_RATING], else raises InvalidRatingError."""
    if rating < MIN_RATING or rating > MAX_RATING:
        raise InvalidRatingError(rating)
    return rating


def compute_average_rating(ratings: Iterable[int]) -> Optional[float]:
    """
    Mean of the given ratings rounded to two decimals.

    Uses the built-in round(), so exact ties go to the even digit
    (4.125 -> 4.12).

    Returns:
        Optional[float]: None when there are no ratings.
    """
    values = list(ratings)
    if not values:
        return None
    return round(sum(values) / len(values), 2)
