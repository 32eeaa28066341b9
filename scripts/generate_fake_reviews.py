"""
Script para generación de reseñas falsas sobre los libros existentes.

Este módulo crea reseñas de prueba utilizando Faker y las funciones CRUD del
proyecto, de modo que pasan por las mismas validaciones que la API.

Uso:
    python scripts/generate_fake_reviews.py [--per-book N]

Nota:
    - El script NO crea libros, solo utiliza los existentes.
"""

import argparse
import logging
import random
import sys
from typing import List, Optional

from faker import Faker

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

try:
    from sqlalchemy.exc import SQLAlchemyError
    from sqlalchemy.orm import Session
    from booklibrary.core.exceptions import DomainError
    from booklibrary.crud import create_review, get_books
    from booklibrary.db.session import SessionLocal, init_db
    from booklibrary.schemas.review import ReviewCreate
except ImportError as e:
    logger.error(f"Error importando módulos: {e}.")
    logger.error("Asegúrate de haber ejecutado 'pip install -e .'")
    sys.exit(1)

MIN_REVIEWS_PER_BOOK: int = 1
MAX_REVIEWS_PER_BOOK: int = 5

fake = Faker(['es_ES', 'en_US'])


def generate_reviews(db: Session, max_per_book: int = MAX_REVIEWS_PER_BOOK) -> int:
    """
    Añade entre MIN_REVIEWS_PER_BOOK y `max_per_book` reseñas a cada libro.

    Args:
        db (Session): Sesión SQLAlchemy activa.
        max_per_book (int): Máximo de reseñas por libro.

    Returns:
        int: Número de reseñas creadas.
    """
    book_ids: List[int] = [book.id for book in get_books(db, limit=10_000)]
    if not book_ids:
        logger.error("No hay libros en la base de datos. No se pueden generar reseñas.")
        return 0
    logger.info(f"Se encontraron {len(book_ids)} libros disponibles.")

    total_reviews_added = 0
    for book_id in book_ids:
        for _ in range(random.randint(MIN_REVIEWS_PER_BOOK, max(MIN_REVIEWS_PER_BOOK, max_per_book))):
            review_in = ReviewCreate(
                book_id=book_id,
                rating=random.randint(1, 5),
                reviewer_name=fake.name(),
                reviewer_email=fake.safe_email() if random.random() < 0.6 else None,
                comment=fake.paragraph(nb_sentences=random.randint(1, 4)) if random.random() < 0.7 else None,
            )
            try:
                create_review(db, review_in)
                total_reviews_added += 1
            except DomainError as exc:
                logger.warning(f"  Reseña rechazada para el libro {book_id}: {exc}")
            except SQLAlchemyError as exc:
                logger.error(f"  Error de base de datos creando reseña para el libro {book_id}: {exc}")

    logger.info(f"Total reseñas falsas añadidas: {total_reviews_added}")
    return total_reviews_added


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Add Faker-generated reviews to every book.")
    parser.add_argument("--per-book", type=int, default=MAX_REVIEWS_PER_BOOK, help="maximum reviews per book")
    args = parser.parse_args()

    init_db()
    db_session: Optional[Session] = None
    try:
        db_session = SessionLocal()
        generate_reviews(db_session, max_per_book=args.per_book)
    except Exception as main_exc:
        logger.exception(f"Error CRÍTICO durante la generación de reseñas: {main_exc}")
    finally:
        if db_session:
            logger.info("Cerrando sesión de base de datos.")
            db_session.close()
