"""
Operaciones CRUD para el modelo Author.
Includes lookups (single, batched, by nationality, by name) and the
create/update/delete rules for authors.
"""

import logging
from typing import Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.exceptions import AuthorNotFoundError
from ..core.validation import require_non_blank
from ..db.session import commit_or_rollback
from ..models.author import Author
from ..models.book import Book  # noqa: F401  (mapper dependency of Author.books)
from ..schemas.author import AuthorCreate, AuthorUpdate

logger = logging.getLogger(__name__)


def get_author_by_id(db: Session, author_id: int) -> Optional[Author]:
    return db.get(Author, author_id)


def get_authors(db: Session, skip: int = 0, limit: int = 100) -> List[Author]:
    stmt = select(Author).order_by(Author.id).offset(skip).limit(limit)
    return list(db.execute(stmt).scalars().all())


def get_authors_by_nationality(db: Session, nationality: str, skip: int = 0, limit: int = 100) -> List[Author]:
    stmt = (
        select(Author)
        .where(Author.nationality == nationality)
        .order_by(Author.id)
        .offset(skip)
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())


def search_authors(db: Session, search_term: str, skip: int = 0, limit: int = 100) -> List[Author]:
    """
    Busca autores cuyo nombre contenga el término (sin distinguir mayúsculas).

    Args:
        db (Session): Sesión de base de datos SQLAlchemy.
        search_term (str): Texto a buscar dentro del nombre.
        skip (int): Registros a omitir.
        limit (int): Máximo de resultados.

    Returns:
        List[Author]: Autores que coinciden.
    """
    stmt = (
        select(Author)
        .where(Author.name.ilike(f"%{search_term}%"))
        .order_by(Author.id)
        .offset(skip)
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())


def get_authors_by_ids(db: Session, author_ids: Sequence[int]) -> Dict[int, Author]:
    """Batch lookup used by the author dataloader."""
    if not author_ids:
        return {}
    stmt = select(Author).where(Author.id.in_(set(author_ids)))
    return {author.id: author for author in db.execute(stmt).scalars().all()}


def create_author(db: Session, author_in: AuthorCreate) -> Author:
    db_author = Author(**author_in.model_dump())
    db.add(db_author)
    commit_or_rollback(db, "author creation")
    db.refresh(db_author)
    logger.info(f"Author {db_author.id} '{db_author.name}' created.")
    return db_author


def update_author(db: Session, author_in: AuthorUpdate) -> Author:
    """
    Actualiza parcialmente un autor: solo los campos enviados y no nulos.

    Raises:
        AuthorNotFoundError: Si el autor no existe.
        BlankFieldError: Si se envía un nombre vacío.
    """
    db_author = get_author_by_id(db, author_in.id)
    if db_author is None:
        logger.warning(f"Attempted update of non-existent author ID: {author_in.id}")
        raise AuthorNotFoundError(author_in.id)

    changes = author_in.model_dump(exclude_unset=True, exclude_none=True, exclude={"id"})
    if "name" in changes:
        require_non_blank(changes["name"], "name")
    for field, value in changes.items():
        setattr(db_author, field, value)

    commit_or_rollback(db, f"update of author {author_in.id}")
    db.refresh(db_author)
    logger.info(f"Author {db_author.id} updated ({', '.join(sorted(changes)) or 'no changes'}).")
    return db_author


def delete_author(db: Session, author_id: int) -> bool:
    """
    Deletes an author together with all their books and those books' reviews.

    Raises:
        AuthorNotFoundError: If the author does not exist.
    """
    db_author = get_author_by_id(db, author_id)
    if db_author is None:
        logger.warning(f"Attempted delete of non-existent author ID: {author_id}")
        raise AuthorNotFoundError(author_id)

    book_count = db_author.book_count
    db.delete(db_author)
    commit_or_rollback(db, f"delete of author {author_id}")
    logger.info(f"Author {author_id} deleted with {book_count} book(s).")
    return True
