"""
Per-request DataLoaders that batch relationship lookups of the GraphQL types.
"""

from typing import List, Optional

from sqlalchemy.orm import Session
from strawberry.dataloader import DataLoader

from booklibrary import crud
from booklibrary.models.author import Author
from booklibrary.models.book import Book
from booklibrary.models.genre import Genre
from booklibrary.models.review import Review


class Loaders:
    """
    Bundle of DataLoaders bound to one database session.

    Attributes:
        author_by_id: Author for each author id (None if missing).
        book_by_id: Book for each book id (None if missing).
        books_by_author: Books of each author id.
        books_by_genre: Books of each genre id.
        reviews_by_book: Reviews of each book id.
        genres_by_book: Genres of each book id.
    """

    def __init__(self, db: Session):
        self.db = db
        self.author_by_id = DataLoader(load_fn=self._load_authors)
        self.book_by_id = DataLoader(load_fn=self._load_books)
        self.books_by_author = DataLoader(load_fn=self._load_books_by_author)
        self.books_by_genre = DataLoader(load_fn=self._load_books_by_genre)
        self.reviews_by_book = DataLoader(load_fn=self._load_reviews_by_book)
        self.genres_by_book = DataLoader(load_fn=self._load_genres_by_book)

    def clear(self) -> None:
        """Drops every cached value; called after each committed write."""
        for loader in (
            self.author_by_id,
            self.book_by_id,
            self.books_by_author,
            self.books_by_genre,
            self.reviews_by_book,
            self.genres_by_book,
        ):
            loader.clear_all()

    async def _load_authors(self, keys: List[int]) -> List[Optional[Author]]:
        found = crud.get_authors_by_ids(self.db, keys)
        return [found.get(key) for key in keys]

    async def _load_books(self, keys: List[int]) -> List[Optional[Book]]:
        found = crud.get_books_by_ids(self.db, keys)
        return [found.get(key) for key in keys]

    async def _load_books_by_author(self, keys: List[int]) -> List[List[Book]]:
        grouped = crud.get_books_by_author_ids(self.db, keys)
        return [grouped.get(key, []) for key in keys]

    async def _load_books_by_genre(self, keys: List[int]) -> List[List[Book]]:
        grouped = crud.get_books_by_genre_ids(self.db, keys)
        return [grouped.get(key, []) for key in keys]

    async def _load_reviews_by_book(self, keys: List[int]) -> List[List[Review]]:
        grouped = crud.get_reviews_by_book_ids(self.db, keys)
        return [grouped.get(key, []) for key in keys]

    async def _load_genres_by_book(self, keys: List[int]) -> List[List[Genre]]:
        grouped = crud.get_genres_by_book_ids(self.db, keys)
        return [grouped.get(key, []) for key in keys]
