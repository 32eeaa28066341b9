"""
GraphQL input types.

Update inputs default every optional field to UNSET so that a field the
caller left out can be told apart from one sent explicitly; `provided_fields`
keeps only what was sent before the input is turned into a pydantic schema.
"""

import dataclasses
import datetime
from typing import Any, Dict, List, Optional

import strawberry
from strawberry import UNSET


def provided_fields(data: Any) -> Dict[str, Any]:
    """Fields of a strawberry input that the caller actually sent."""
    return {
        field.name: getattr(data, field.name)
        for field in dataclasses.fields(data)
        if getattr(data, field.name) is not UNSET
    }


@strawberry.input
class AddAuthorInput:
    name: str
    biography: Optional[str] = UNSET
    date_of_birth: Optional[datetime.date] = UNSET
    nationality: Optional[str] = UNSET
    image_url: Optional[str] = UNSET


@strawberry.input
class UpdateAuthorInput:
    id: int
    name: Optional[str] = UNSET
    biography: Optional[str] = UNSET
    date_of_birth: Optional[datetime.date] = UNSET
    nationality: Optional[str] = UNSET
    image_url: Optional[str] = UNSET


@strawberry.input
class AddBookInput:
    title: str
    author_id: int
    isbn: Optional[str] = UNSET
    description: Optional[str] = UNSET
    published_date: Optional[datetime.date] = UNSET
    page_count: Optional[int] = UNSET
    cover_image_url: Optional[str] = UNSET
    publisher: Optional[str] = UNSET
    language: Optional[str] = strawberry.field(default=UNSET, description="Defaults to English.")
    genre_ids: Optional[List[int]] = UNSET


@strawberry.input
class UpdateBookInput:
    id: int
    title: Optional[str] = UNSET
    isbn: Optional[str] = UNSET
    description: Optional[str] = UNSET
    published_date: Optional[datetime.date] = UNSET
    page_count: Optional[int] = UNSET
    cover_image_url: Optional[str] = UNSET
    publisher: Optional[str] = UNSET
    language: Optional[str] = UNSET
    genre_ids: Optional[List[int]] = strawberry.field(
        default=UNSET,
        description="Replaces the whole genre set when present.",
    )


@strawberry.input
class AddGenreInput:
    name: str
    description: Optional[str] = UNSET


@strawberry.input
class AddReviewInput:
    book_id: int
    rating: int
    reviewer_name: str
    comment: Optional[str] = UNSET
    reviewer_email: Optional[str] = UNSET


@strawberry.input
class UpdateReviewInput:
    id: int
    rating: Optional[int] = UNSET
    comment: Optional[str] = UNSET
