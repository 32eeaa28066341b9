"""
Operaciones CRUD para el modelo Genre.
"""

import logging
from typing import Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.exceptions import GenreNotFoundError
from ..db.session import commit_or_rollback
from ..models.book import book_genres
from ..models.genre import Genre
from ..schemas.genre import GenreCreate

logger = logging.getLogger(__name__)


def get_genre_by_id(db: Session, genre_id: int) -> Optional[Genre]:
    return db.get(Genre, genre_id)


def get_genre_by_name(db: Session, name: str) -> Optional[Genre]:
    stmt = select(Genre).where(Genre.name == name)
    return db.execute(stmt).scalars().first()


def get_genres(db: Session, skip: int = 0, limit: int = 100) -> List[Genre]:
    stmt = select(Genre).order_by(Genre.id).offset(skip).limit(limit)
    return list(db.execute(stmt).scalars().all())


def get_genres_by_ids(db: Session, genre_ids: Sequence[int]) -> Dict[int, Genre]:
    if not genre_ids:
        return {}
    stmt = select(Genre).where(Genre.id.in_(set(genre_ids)))
    return {genre.id: genre for genre in db.execute(stmt).scalars().all()}


def get_genres_by_book_ids(db: Session, book_ids: Sequence[int]) -> Dict[int, List[Genre]]:
    """
    Genres grouped by book id, read straight from the association table.

    Returns:
        Dict[int, List[Genre]]: Only books with at least one genre appear as keys.
    """
    if not book_ids:
        return {}
    stmt = (
        select(book_genres.c.book_id, Genre)
        .join(Genre, Genre.id == book_genres.c.genre_id)
        .where(book_genres.c.book_id.in_(set(book_ids)))
        .order_by(Genre.id)
    )
    grouped: Dict[int, List[Genre]] = {}
    for book_id, genre in db.execute(stmt).all():
        grouped.setdefault(book_id, []).append(genre)
    return grouped


def create_genre(db: Session, genre_in: GenreCreate) -> Genre:
    """
    Crea un género. La unicidad del nombre la garantiza el índice único de la
    base de datos; un duplicado termina en IntegrityError.
    """
    db_genre = Genre(**genre_in.model_dump())
    db.add(db_genre)
    commit_or_rollback(db, "genre creation")
    db.refresh(db_genre)
    logger.info(f"Genre {db_genre.id} '{db_genre.name}' created.")
    return db_genre


def delete_genre(db: Session, genre_id: int) -> bool:
    """
    Deletes a genre and its book associations. Books are left untouched.

    Raises:
        GenreNotFoundError: If the genre does not exist.
    """
    db_genre = get_genre_by_id(db, genre_id)
    if db_genre is None:
        logger.warning(f"Attempted delete of non-existent genre ID: {genre_id}")
        raise GenreNotFoundError(genre_id)

    db.delete(db_genre)
    commit_or_rollback(db, f"delete of genre {genre_id}")
    logger.info(f"Genre {genre_id} deleted.")
    return True
