"""
GraphQL queries, one class per entity merged into the root Query type.
"""

from typing import List, Optional

import strawberry
from strawberry.tools import merge_types
from strawberry.types import Info

from booklibrary import crud
from booklibrary.api.errors import translate_errors
from booklibrary.api.types import AuthorType, BookType, GenreType, ReviewType
from booklibrary.core.config import settings


def _limit(limit: Optional[int]) -> int:
    return limit if limit is not None and limit > 0 else settings.DEFAULT_PAGE_SIZE


@strawberry.type
class AuthorQuery:
    @strawberry.field(description="All authors, ordered by id.")
    def authors(self, info: Info, skip: int = 0, limit: Optional[int] = None) -> List[AuthorType]:
        with translate_errors():
            authors = crud.get_authors(info.context.db, skip=skip, limit=_limit(limit))
        return [AuthorType.from_model(author) for author in authors]

    @strawberry.field
    def author(self, info: Info, id: int) -> Optional[AuthorType]:
        with translate_errors():
            author = crud.get_author_by_id(info.context.db, id)
        return AuthorType.from_model(author) if author else None

    @strawberry.field
    def authors_by_nationality(
        self, info: Info, nationality: str, skip: int = 0, limit: Optional[int] = None
    ) -> List[AuthorType]:
        with translate_errors():
            authors = crud.get_authors_by_nationality(info.context.db, nationality, skip=skip, limit=_limit(limit))
        return [AuthorType.from_model(author) for author in authors]

    @strawberry.field(description="Authors whose name contains the search term.")
    def search_authors(
        self, info: Info, search_term: str, skip: int = 0, limit: Optional[int] = None
    ) -> List[AuthorType]:
        with translate_errors():
            authors = crud.search_authors(info.context.db, search_term, skip=skip, limit=_limit(limit))
        return [AuthorType.from_model(author) for author in authors]


@strawberry.type
class BookQuery:
    @strawberry.field(description="All books, ordered by id.")
    def books(self, info: Info, skip: int = 0, limit: Optional[int] = None) -> List[BookType]:
        with translate_errors():
            books = crud.get_books(info.context.db, skip=skip, limit=_limit(limit))
        return [BookType.from_model(book) for book in books]

    @strawberry.field
    def book(self, info: Info, id: int) -> Optional[BookType]:
        with translate_errors():
            book = crud.get_book_by_id(info.context.db, id)
        return BookType.from_model(book) if book else None

    @strawberry.field
    def books_by_author(
        self, info: Info, author_id: int, skip: int = 0, limit: Optional[int] = None
    ) -> List[BookType]:
        with translate_errors():
            books = crud.get_books_by_author(info.context.db, author_id, skip=skip, limit=_limit(limit))
        return [BookType.from_model(book) for book in books]

    @strawberry.field(description="Reviewed books with the best average rating first.")
    def top_rated_books(self, info: Info, count: int = 0) -> List[BookType]:
        if count <= 0:
            count = settings.TOP_RATED_DEFAULT_COUNT
        with translate_errors():
            books = crud.get_top_rated_books(info.context.db, count=count)
        return [BookType.from_model(book) for book in books]

    @strawberry.field(description="Books whose title or description contains the search term.")
    def search_books(
        self, info: Info, search_term: str, skip: int = 0, limit: Optional[int] = None
    ) -> List[BookType]:
        with translate_errors():
            books = crud.search_books(info.context.db, search_term, skip=skip, limit=_limit(limit))
        return [BookType.from_model(book) for book in books]


@strawberry.type
class GenreQuery:
    @strawberry.field
    def genres(self, info: Info, skip: int = 0, limit: Optional[int] = None) -> List[GenreType]:
        with translate_errors():
            genres = crud.get_genres(info.context.db, skip=skip, limit=_limit(limit))
        return [GenreType.from_model(genre) for genre in genres]

    @strawberry.field
    def genre(self, info: Info, id: int) -> Optional[GenreType]:
        with translate_errors():
            genre = crud.get_genre_by_id(info.context.db, id)
        return GenreType.from_model(genre) if genre else None


@strawberry.type
class ReviewQuery:
    @strawberry.field(description="All reviews, newest first.")
    def reviews(self, info: Info, skip: int = 0, limit: Optional[int] = None) -> List[ReviewType]:
        with translate_errors():
            reviews = crud.get_reviews(info.context.db, skip=skip, limit=_limit(limit))
        return [ReviewType.from_model(review) for review in reviews]

    @strawberry.field
    def reviews_by_book(
        self, info: Info, book_id: int, skip: int = 0, limit: Optional[int] = None
    ) -> List[ReviewType]:
        with translate_errors():
            reviews = crud.get_reviews_for_book(info.context.db, book_id, skip=skip, limit=_limit(limit))
        return [ReviewType.from_model(review) for review in reviews]

    @strawberry.field
    def reviews_by_reviewer(
        self, info: Info, reviewer_name: str, skip: int = 0, limit: Optional[int] = None
    ) -> List[ReviewType]:
        with translate_errors():
            reviews = crud.get_reviews_by_reviewer(info.context.db, reviewer_name, skip=skip, limit=_limit(limit))
        return [ReviewType.from_model(review) for review in reviews]

    @strawberry.field
    def reviews_by_rating(
        self, info: Info, rating: int, skip: int = 0, limit: Optional[int] = None
    ) -> List[ReviewType]:
        with translate_errors():
            reviews = crud.get_reviews_by_rating(info.context.db, rating, skip=skip, limit=_limit(limit))
        return [ReviewType.from_model(review) for review in reviews]


Query = merge_types("Query", (AuthorQuery, BookQuery, GenreQuery, ReviewQuery))
