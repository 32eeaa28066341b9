"""
Modelo ORM para la entidad Book.
Defines the book columns, the book/genre association table and the derived
rating aggregates.
"""

from typing import Iterable, Optional

from sqlalchemy import Column, Date, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from booklibrary.core.validation import compute_average_rating, require_non_blank
from booklibrary.db.session import Base

DEFAULT_LANGUAGE = "English"

book_genres = Table(
    "book_genres",
    Base.metadata,
    Column("book_id", Integer, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", Integer, ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
)


class Book(Base):
    """
    Representa un libro del catálogo.

    Atributos:
        id (int): Identificador primario del libro.
        title (str): Título del libro, nunca vacío.
        isbn (str): ISBN único del libro (opcional).
        description (str): Descripción o sinopsis.
        published_date (date): Fecha de publicación.
        page_count (int): Número de páginas.
        cover_image_url (str): URL de la imagen de portada.
        language (str): Idioma, "English" por defecto.
        publisher (str): Editorial.
        author_id (int): Autor propietario del libro.
        genres (List[Genre]): Géneros asociados.
        reviews (List[Review]): Reseñas del libro.
    """
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(300), index=True, nullable=False)
    isbn = Column(String(20), unique=True, index=True, nullable=True)
    description = Column(String(2000), nullable=True)
    published_date = Column(Date, nullable=True)
    page_count = Column(Integer, nullable=True)
    cover_image_url = Column(String(500), nullable=True)
    language = Column(String(50), nullable=False, default=DEFAULT_LANGUAGE, server_default=DEFAULT_LANGUAGE)
    publisher = Column(String(200), nullable=True)
    author_id = Column(Integer, ForeignKey("authors.id", ondelete="CASCADE"), nullable=False, index=True)

    author = relationship("Author", back_populates="books")
    genres = relationship(
        "Genre",
        secondary=book_genres,
        back_populates="books",
        order_by="Genre.id",
    )
    reviews = relationship(
        "Review",
        back_populates="book",
        cascade="all, delete-orphan",
        order_by="Review.id",
    )

    def __init__(self, title: Optional[str] = None, **kwargs):
        if kwargs.get("language") is None:
            kwargs["language"] = DEFAULT_LANGUAGE
        super().__init__(title=require_non_blank(title, "title"), **kwargs)

    @property
    def average_rating(self) -> Optional[float]:
        """Mean rating of the current reviews, None when there are none."""
        return compute_average_rating(review.rating for review in self.reviews)

    @property
    def review_count(self) -> int:
        return len(self.reviews)

    def is_valid(self) -> bool:
        return bool(self.title and self.title.strip()) and (self.author_id or 0) > 0

    def add_review(self, review) -> None:
        if review not in self.reviews:
            self.reviews.append(review)

    def remove_review(self, review) -> None:
        if review in self.reviews:
            self.reviews.remove(review)

    def add_genre(self, genre) -> None:
        if genre not in self.genres:
            self.genres.append(genre)

    def replace_genres(self, genres: Iterable) -> None:
        """Replaces the whole genre set; genres absent from `genres` are detached."""
        self.genres.clear()
        for genre in genres:
            self.add_genre(genre)

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title[:30]}...', isbn='{self.isbn}')>"
