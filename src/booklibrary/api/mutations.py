"""
GraphQL mutations.

Each resolver turns its input into a pydantic schema, runs the matching CRUD
operation (which validates and commits) and, for new books and reviews,
publishes a notification once the write is committed.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

import strawberry
from strawberry.tools import merge_types
from strawberry.types import Info

from booklibrary import crud
from booklibrary.api.errors import translate_errors
from booklibrary.api.inputs import (
    AddAuthorInput,
    AddBookInput,
    AddGenreInput,
    AddReviewInput,
    UpdateAuthorInput,
    UpdateBookInput,
    UpdateReviewInput,
    provided_fields,
)
from booklibrary.api.types import AuthorType, BookType, GenreType, ReviewType
from booklibrary.core.events import BOOK_ADDED, REVIEW_POSTED
from booklibrary.schemas.author import AuthorCreate, AuthorUpdate
from booklibrary.schemas.book import BookCreate, BookUpdate
from booklibrary.schemas.genre import GenreCreate
from booklibrary.schemas.review import ReviewCreate, ReviewUpdate

logger = logging.getLogger(__name__)


@contextmanager
def _writing(info: Info) -> Iterator[None]:
    """
    Runs a CRUD write with error translation. Once the write has committed,
    the request loaders are cleared so later fields of the same request
    read the new state.
    """
    with translate_errors():
        yield
    info.context.loaders.clear()


def _notify(info: Info, topic: str, payload) -> None:
    """Best-effort post-commit notification; a failure is logged and ignored."""
    try:
        info.context.events.publish(topic, payload)
    except Exception:
        logger.exception(f"Notification on '{topic}' failed; the write is kept.")


@strawberry.type
class AuthorMutation:
    @strawberry.mutation
    def add_author(self, info: Info, input: AddAuthorInput) -> AuthorType:
        with _writing(info):
            author = crud.create_author(info.context.db, AuthorCreate(**provided_fields(input)))
        return AuthorType.from_model(author)

    @strawberry.mutation(description="Updates only the fields that are sent and not null.")
    def update_author(self, info: Info, input: UpdateAuthorInput) -> AuthorType:
        with _writing(info):
            author = crud.update_author(info.context.db, AuthorUpdate(**provided_fields(input)))
        return AuthorType.from_model(author)

    @strawberry.mutation(description="Deletes an author and all of their books.")
    def delete_author(self, info: Info, id: int) -> bool:
        with _writing(info):
            return crud.delete_author(info.context.db, id)


@strawberry.type
class BookMutation:
    @strawberry.mutation
    def add_book(self, info: Info, input: AddBookInput) -> BookType:
        with _writing(info):
            book = crud.create_book(info.context.db, BookCreate(**provided_fields(input)))
        payload = BookType.from_model(book)
        _notify(info, BOOK_ADDED, payload)
        return payload

    @strawberry.mutation(description="Partial update; genreIds replaces the genre set when present.")
    def update_book(self, info: Info, input: UpdateBookInput) -> BookType:
        with _writing(info):
            book = crud.update_book(info.context.db, BookUpdate(**provided_fields(input)))
        return BookType.from_model(book)

    @strawberry.mutation(description="Deletes a book and its reviews.")
    def delete_book(self, info: Info, id: int) -> bool:
        with _writing(info):
            return crud.delete_book(info.context.db, id)


@strawberry.type
class GenreMutation:
    @strawberry.mutation
    def add_genre(self, info: Info, input: AddGenreInput) -> GenreType:
        with _writing(info):
            genre = crud.create_genre(info.context.db, GenreCreate(**provided_fields(input)))
        return GenreType.from_model(genre)

    @strawberry.mutation
    def delete_genre(self, info: Info, id: int) -> bool:
        with _writing(info):
            return crud.delete_genre(info.context.db, id)


@strawberry.type
class ReviewMutation:
    @strawberry.mutation
    def add_review(self, info: Info, input: AddReviewInput) -> ReviewType:
        with _writing(info):
            review = crud.create_review(info.context.db, ReviewCreate(**provided_fields(input)))
        payload = ReviewType.from_model(review)
        _notify(info, REVIEW_POSTED, payload)
        return payload

    @strawberry.mutation
    def update_review(self, info: Info, input: UpdateReviewInput) -> ReviewType:
        with _writing(info):
            review = crud.update_review(info.context.db, ReviewUpdate(**provided_fields(input)))
        return ReviewType.from_model(review)

    @strawberry.mutation
    def delete_review(self, info: Info, id: int) -> bool:
        with _writing(info):
            return crud.delete_review(info.context.db, id)


Mutation = merge_types("Mutation", (AuthorMutation, BookMutation, GenreMutation, ReviewMutation))
