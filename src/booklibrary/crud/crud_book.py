"""
Operaciones CRUD para el modelo Book en la base de datos.
Incluye búsquedas por distintos criterios, consultas agrupadas para los
dataloaders y las reglas de consistencia de creación, actualización y borrado.
"""

import logging
from typing import Dict, List, Optional, Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from ..core.exceptions import AuthorNotFoundError, BookNotFoundError, DuplicateIsbnError, GenreNotFoundError
from ..core.validation import require_non_blank
from ..db.session import commit_or_rollback
from ..models.author import Author
from ..models.book import Book, book_genres
from ..models.genre import Genre
from ..models.review import Review
from ..schemas.book import BookCreate, BookUpdate
from .crud_genre import get_genres_by_ids

logger = logging.getLogger(__name__)


def get_book_by_id(db: Session, book_id: int) -> Optional[Book]:
    """
    Recupera un libro por su ID primario.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        book_id (int): ID del libro a recuperar.

    Returns:
        Optional[Book]: El objeto Book si se encuentra, None si no existe.
    """
    return db.get(Book, book_id)


def get_book_by_isbn(db: Session, isbn: str) -> Optional[Book]:
    """
    Recupera un libro por su ISBN.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        isbn (str): ISBN del libro a recuperar.

    Returns:
        Optional[Book]: El objeto Book si se encuentra, None si no existe.
    """
    stmt = select(Book).where(Book.isbn == isbn)
    result = db.execute(stmt)
    return result.scalars().first()


def get_books(db: Session, skip: int = 0, limit: int = 100) -> List[Book]:
    stmt = select(Book).order_by(Book.id).offset(skip).limit(limit)
    return list(db.execute(stmt).scalars().all())


def get_books_by_author(db: Session, author_id: int, skip: int = 0, limit: int = 100) -> List[Book]:
    stmt = select(Book).where(Book.author_id == author_id).order_by(Book.id).offset(skip).limit(limit)
    return list(db.execute(stmt).scalars().all())


def search_books(db: Session, search_term: str, skip: int = 0, limit: int = 100) -> List[Book]:
    """
    Busca libros cuyo título o descripción contengan el término.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        search_term (str): Texto a buscar (coincidencia parcial, sin distinción de mayúsculas).
        skip (int): Registros a omitir.
        limit (int): Número máximo de resultados a devolver.

    Returns:
        List[Book]: Lista de objetos Book que cumplen los criterios.
    """
    pattern = f"%{search_term}%"
    stmt = (
        select(Book)
        .where(or_(Book.title.ilike(pattern), Book.description.ilike(pattern)))
        .order_by(Book.id)
        .offset(skip)
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())


def get_top_rated_books(db: Session, count: int = 10) -> List[Book]:
    """
    Books with at least one review, best average first.

    The average is aggregated in SQL at query time; ties keep id order.
    """
    avg_rating = func.avg(Review.rating)
    stmt = (
        select(Book)
        .join(Review, Review.book_id == Book.id)
        .group_by(Book.id)
        .order_by(avg_rating.desc(), Book.id)
        .limit(count)
    )
    return list(db.execute(stmt).scalars().all())


def get_books_by_ids(db: Session, book_ids: Sequence[int]) -> Dict[int, Book]:
    if not book_ids:
        return {}
    stmt = select(Book).where(Book.id.in_(set(book_ids)))
    return {book.id: book for book in db.execute(stmt).scalars().all()}


def get_books_by_author_ids(db: Session, author_ids: Sequence[int]) -> Dict[int, List[Book]]:
    if not author_ids:
        return {}
    stmt = select(Book).where(Book.author_id.in_(set(author_ids))).order_by(Book.id)
    grouped: Dict[int, List[Book]] = {}
    for book in db.execute(stmt).scalars().all():
        grouped.setdefault(book.author_id, []).append(book)
    return grouped


def get_books_by_genre_ids(db: Session, genre_ids: Sequence[int]) -> Dict[int, List[Book]]:
    if not genre_ids:
        return {}
    stmt = (
        select(book_genres.c.genre_id, Book)
        .join(Book, Book.id == book_genres.c.book_id)
        .where(book_genres.c.genre_id.in_(set(genre_ids)))
        .order_by(Book.id)
    )
    grouped: Dict[int, List[Book]] = {}
    for genre_id, book in db.execute(stmt).all():
        grouped.setdefault(genre_id, []).append(book)
    return grouped


def _resolve_genres(db: Session, genre_ids: Sequence[int]) -> List[Genre]:
    """Loads every requested genre in request order, failing on the first missing id."""
    unique_ids = list(dict.fromkeys(genre_ids))
    found = get_genres_by_ids(db, unique_ids)
    for genre_id in unique_ids:
        if genre_id not in found:
            logger.warning(f"Genre ID {genre_id} referenced by a book does not exist.")
            raise GenreNotFoundError(genre_id)
    return [found[genre_id] for genre_id in unique_ids]


def _ensure_isbn_available(db: Session, isbn: str, book_id: Optional[int] = None) -> None:
    stmt = select(Book.id).where(Book.isbn == isbn)
    if book_id is not None:
        stmt = stmt.where(Book.id != book_id)
    if db.execute(stmt).first() is not None:
        logger.warning(f"Rejected duplicate ISBN '{isbn}'.")
        raise DuplicateIsbnError(isbn)


def _normalize_isbn(isbn: Optional[str]) -> Optional[str]:
    if isbn is None or not isbn.strip():
        return None
    return isbn


def create_book(db: Session, book_in: BookCreate) -> Book:
    """
    Crea un libro tras validar autor, ISBN y géneros.

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        book_in (BookCreate): Datos del libro.

    Returns:
        Book: El libro creado y confirmado.

    Raises:
        AuthorNotFoundError: Si el autor no existe.
        DuplicateIsbnError: Si el ISBN ya pertenece a otro libro.
        GenreNotFoundError: Con el primer ID de género inexistente.
        BlankFieldError: Si el título está vacío.
    """
    if db.get(Author, book_in.author_id) is None:
        logger.warning(f"Attempted to create a book for non-existent author ID: {book_in.author_id}")
        raise AuthorNotFoundError(book_in.author_id)

    isbn = _normalize_isbn(book_in.isbn)
    if isbn is not None:
        _ensure_isbn_available(db, isbn)

    genres = _resolve_genres(db, book_in.genre_ids) if book_in.genre_ids else []

    db_book = Book(
        **book_in.model_dump(exclude={"isbn", "genre_ids"}),
        isbn=isbn,
    )
    db_book.replace_genres(genres)
    db.add(db_book)
    commit_or_rollback(db, "book creation")
    db.refresh(db_book)
    logger.info(f"Book {db_book.id} '{db_book.title}' created for author {db_book.author_id}.")
    return db_book


def update_book(db: Session, book_in: BookUpdate) -> Book:
    """
    Actualiza parcialmente un libro.

    Solo se sobrescriben los campos enviados y no nulos. `genre_ids`, si se
    envía (aunque sea vacío), reemplaza el conjunto completo de géneros.

    Raises:
        BookNotFoundError: Si el libro no existe.
        DuplicateIsbnError: Si el nuevo ISBN pertenece a otro libro.
        GenreNotFoundError: Con el primer ID de género inexistente.
        BlankFieldError: Si se envía un título vacío.
    """
    db_book = get_book_by_id(db, book_in.id)
    if db_book is None:
        logger.warning(f"Attempted update of non-existent book ID: {book_in.id}")
        raise BookNotFoundError(book_in.id)

    changes = book_in.model_dump(exclude_unset=True, exclude_none=True, exclude={"id", "genre_ids"})

    if "title" in changes:
        require_non_blank(changes["title"], "title")

    if "isbn" in changes:
        new_isbn = _normalize_isbn(changes["isbn"])
        if new_isbn is not None and new_isbn != db_book.isbn:
            _ensure_isbn_available(db, new_isbn, book_id=db_book.id)
        changes["isbn"] = new_isbn

    genres = None
    if "genre_ids" in book_in.model_fields_set and book_in.genre_ids is not None:
        genres = _resolve_genres(db, book_in.genre_ids)

    for field, value in changes.items():
        setattr(db_book, field, value)
    if genres is not None:
        db_book.replace_genres(genres)

    commit_or_rollback(db, f"update of book {book_in.id}")
    db.refresh(db_book)
    logger.info(f"Book {db_book.id} updated ({', '.join(sorted(changes)) or 'no field changes'}).")
    return db_book


def delete_book(db: Session, book_id: int) -> bool:
    """
    Deletes a book, its reviews and its genre associations.

    Raises:
        BookNotFoundError: If the book does not exist.
    """
    db_book = get_book_by_id(db, book_id)
    if db_book is None:
        logger.warning(f"Attempted delete of non-existent book ID: {book_id}")
        raise BookNotFoundError(book_id)

    review_count = db_book.review_count
    db.delete(db_book)
    commit_or_rollback(db, f"delete of book {book_id}")
    logger.info(f"Book {book_id} deleted with {review_count} review(s).")
    return True
