"""
Domain exceptions for the Book Library service.

Every error carries the offending identifier or value and exposes an
`extensions` dict that the GraphQL layer forwards to callers as structured
error data.
"""

from typing import Any, Dict


class DomainError(Exception):
    """Base class for all domain errors."""

    code = "DOMAIN_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def extensions(self) -> Dict[str, Any]:
        return {"code": self.code}


class EntityNotFoundError(DomainError, LookupError):
    """Raised when an id does not resolve to an existing entity."""

    entity = "Entity"
    id_field = "id"

    def __init__(self, entity_id: int):
        super().__init__(f"{self.entity} with ID '{entity_id}' was not found.")
        self.entity_id = entity_id

    @property
    def extensions(self) -> Dict[str, Any]:
        return {"code": self.code, self.id_field: self.entity_id}


class BookNotFoundError(EntityNotFoundError):
    code = "BOOK_NOT_FOUND"
    entity = "Book"
    id_field = "bookId"

    @property
    def book_id(self) -> int:
        return self.entity_id


class AuthorNotFoundError(EntityNotFoundError):
    code = "AUTHOR_NOT_FOUND"
    entity = "Author"
    id_field = "authorId"

    @property
    def author_id(self) -> int:
        return self.entity_id


class GenreNotFoundError(EntityNotFoundError):
    code = "GENRE_NOT_FOUND"
    entity = "Genre"
    id_field = "genreId"

    @property
    def genre_id(self) -> int:
        return self.entity_id


class ReviewNotFoundError(EntityNotFoundError):
    code = "REVIEW_NOT_FOUND"
    entity = "Review"
    id_field = "reviewId"

    @property
    def review_id(self) -> int:
        return self.entity_id


class DuplicateIsbnError(DomainError):
    """Raised when a book is created or updated with an ISBN owned by another book."""

    code = "DUPLICATE_ISBN"

    def __init__(self, isbn: str):
        super().__init__(f"A book with ISBN '{isbn}' already exists.")
        self.isbn = isbn

    @property
    def extensions(self) -> Dict[str, Any]:
        return {"code": self.code, "isbn": self.isbn}


class InvalidRatingError(DomainError, ValueError):
    """Raised when a rating falls outside the 1-5 range."""

    code = "INVALID_RATING"

    def __init__(self, rating: int):
        super().__init__(f"Rating '{rating}' is invalid. Rating must be between 1 and 5.")
        self.rating = rating

    @property
    def extensions(self) -> Dict[str, Any]:
        return {"code": self.code, "rating": self.rating}


class BlankFieldError(DomainError, ValueError):
    """Raised when a required text field is missing, empty or whitespace only."""

    code = "BLANK_REQUIRED_FIELD"

    def __init__(self, field_name: str):
        super().__init__(f"Field '{field_name}' cannot be empty.")
        self.field_name = field_name

    @property
    def extensions(self) -> Dict[str, Any]:
        return {"code": self.code, "field": self.field_name}
