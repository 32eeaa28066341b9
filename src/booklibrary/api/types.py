"""
GraphQL object types.

Types are plain snapshots of the ORM rows built with `from_model`; their
relationship fields and aggregates are resolved through the request
dataloaders, so lists of books never trigger one query per item.
"""

import datetime
from typing import List, Optional

import strawberry
from strawberry.types import Info

from booklibrary.core.validation import compute_average_rating
from booklibrary.models.author import Author
from booklibrary.models.book import Book
from booklibrary.models.genre import Genre
from booklibrary.models.review import Review


@strawberry.type(name="Author", description="An author who writes books.")
class AuthorType:
    id: int
    name: str
    biography: Optional[str]
    date_of_birth: Optional[datetime.date]
    nationality: Optional[str]
    image_url: Optional[str]

    @strawberry.field
    async def books(self, info: Info) -> List["BookType"]:
        books = await info.context.loaders.books_by_author.load(self.id)
        return [BookType.from_model(book) for book in books]

    @strawberry.field
    async def book_count(self, info: Info) -> int:
        return len(await info.context.loaders.books_by_author.load(self.id))

    @classmethod
    def from_model(cls, author: Author) -> "AuthorType":
        return cls(
            id=author.id,
            name=author.name,
            biography=author.biography,
            date_of_birth=author.date_of_birth,
            nationality=author.nationality,
            image_url=author.image_url,
        )


@strawberry.type(name="Book", description="A book in the library.")
class BookType:
    id: int
    title: str
    isbn: Optional[str]
    description: Optional[str]
    published_date: Optional[datetime.date]
    page_count: Optional[int]
    cover_image_url: Optional[str]
    language: str
    publisher: Optional[str]
    author_id: int

    @strawberry.field
    async def author(self, info: Info) -> Optional[AuthorType]:
        author = await info.context.loaders.author_by_id.load(self.author_id)
        return AuthorType.from_model(author) if author is not None else None

    @strawberry.field
    async def genres(self, info: Info) -> List["GenreType"]:
        genres = await info.context.loaders.genres_by_book.load(self.id)
        return [GenreType.from_model(genre) for genre in genres]

    @strawberry.field
    async def reviews(self, info: Info) -> List["ReviewType"]:
        reviews = await info.context.loaders.reviews_by_book.load(self.id)
        return [ReviewType.from_model(review) for review in reviews]

    @strawberry.field(description="Mean review rating rounded to two decimals; null without reviews.")
    async def average_rating(self, info: Info) -> Optional[float]:
        reviews = await info.context.loaders.reviews_by_book.load(self.id)
        return compute_average_rating(review.rating for review in reviews)

    @strawberry.field
    async def review_count(self, info: Info) -> int:
        return len(await info.context.loaders.reviews_by_book.load(self.id))

    @classmethod
    def from_model(cls, book: Book) -> "BookType":
        return cls(
            id=book.id,
            title=book.title,
            isbn=book.isbn,
            description=book.description,
            published_date=book.published_date,
            page_count=book.page_count,
            cover_image_url=book.cover_image_url,
            language=book.language,
            publisher=book.publisher,
            author_id=book.author_id,
        )


@strawberry.type(name="Genre", description="A book genre/category.")
class GenreType:
    id: int
    name: str
    description: Optional[str]

    @strawberry.field
    async def books(self, info: Info) -> List[BookType]:
        books = await info.context.loaders.books_by_genre.load(self.id)
        return [BookType.from_model(book) for book in books]

    @classmethod
    def from_model(cls, genre: Genre) -> "GenreType":
        return cls(id=genre.id, name=genre.name, description=genre.description)


@strawberry.type(name="Review", description="A reader review of a book.")
class ReviewType:
    id: int
    rating: int
    comment: Optional[str]
    reviewer_name: str
    reviewer_email: Optional[str]
    created_at: datetime.datetime
    updated_at: Optional[datetime.datetime]
    book_id: int

    @strawberry.field
    async def book(self, info: Info) -> Optional[BookType]:
        book = await info.context.loaders.book_by_id.load(self.book_id)
        return BookType.from_model(book) if book is not None else None

    @classmethod
    def from_model(cls, review: Review) -> "ReviewType":
        return cls(
            id=review.id,
            rating=review.rating,
            comment=review.comment,
            reviewer_name=review.reviewer_name,
            reviewer_email=review.reviewer_email,
            created_at=review.created_at,
            updated_at=review.updated_at,
            book_id=review.book_id,
        )
