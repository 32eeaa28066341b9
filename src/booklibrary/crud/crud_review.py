from sqlalchemy.orm import Session
from sqlalchemy import desc, select
import logging
from typing import Dict, List, Sequence

from ..core.exceptions import BookNotFoundError, ReviewNotFoundError
from ..core.validation import validate_rating
from ..db.session import commit_or_rollback
from ..models.review import Review
from ..models.book import Book
from ..schemas.review import ReviewCreate, ReviewUpdate

logger = logging.getLogger(__name__)


def create_review(db: Session, review_in: ReviewCreate) -> Review:
    """
    Creates a review for an existing book.

    The rating is checked before the book lookup, so an out-of-range rating
    is reported even when the book id is also wrong.

    Raises:
        InvalidRatingError: If the rating is outside 1-5.
        BookNotFoundError: If the book does not exist.
        BlankFieldError: If the reviewer name is blank.
    """
    validate_rating(review_in.rating)

    if db.get(Book, review_in.book_id) is None:
        logger.warning(f"Attempted review of non-existent book ID: {review_in.book_id}")
        raise BookNotFoundError(review_in.book_id)

    db_review = Review(**review_in.model_dump())
    db.add(db_review)
    commit_or_rollback(db, f"review creation for book {review_in.book_id}")
    db.refresh(db_review)
    logger.info(f"Review {db_review.id} created for book {db_review.book_id} by '{db_review.reviewer_name}'.")
    return db_review


def get_review_by_id(db: Session, review_id: int) -> Review | None:
    return db.get(Review, review_id)


def get_reviews(db: Session, skip: int = 0, limit: int = 100) -> List[Review]:
    """Obtiene todas las reseñas, las más recientes primero."""
    stmt = select(Review).order_by(desc(Review.created_at), desc(Review.id)).offset(skip).limit(limit)
    return list(db.execute(stmt).scalars().all())


def get_reviews_for_book(db: Session, book_id: int, skip: int = 0, limit: int = 100) -> List[Review]:
    """Obtiene las reseñas de un libro, las más recientes primero."""
    stmt = (
        select(Review)
        .where(Review.book_id == book_id)
        .order_by(desc(Review.created_at), desc(Review.id))
        .offset(skip)
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())


def get_reviews_by_reviewer(db: Session, reviewer_name: str, skip: int = 0, limit: int = 100) -> List[Review]:
    stmt = (
        select(Review)
        .where(Review.reviewer_name.ilike(f"%{reviewer_name}%"))
        .order_by(Review.id)
        .offset(skip)
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())


def get_reviews_by_rating(db: Session, rating: int, skip: int = 0, limit: int = 100) -> List[Review]:
    stmt = select(Review).where(Review.rating == rating).order_by(Review.id).offset(skip).limit(limit)
    return list(db.execute(stmt).scalars().all())


def get_reviews_by_book_ids(db: Session, book_ids: Sequence[int]) -> Dict[int, List[Review]]:
    """Reviews grouped by book id, for the reviews dataloader."""
    if not book_ids:
        return {}
    stmt = select(Review).where(Review.book_id.in_(set(book_ids))).order_by(Review.id)
    grouped: Dict[int, List[Review]] = {}
    for review in db.execute(stmt).scalars().all():
        grouped.setdefault(review.book_id, []).append(review)
    return grouped


def update_review(db: Session, review_in: ReviewUpdate) -> Review:
    """
    Updates the rating and/or comment of a review. Each applied field stamps
    updated_at; fields that are absent or None are left as they are.

    Raises:
        ReviewNotFoundError: If the review does not exist.
        InvalidRatingError: If a new rating is outside 1-5.
    """
    db_review = get_review_by_id(db, review_in.id)
    if not db_review:
        logger.warning(f"Attempted update of non-existent review ID: {review_in.id}")
        raise ReviewNotFoundError(review_in.id)

    if review_in.rating is not None:
        db_review.update_rating(review_in.rating)
    if review_in.comment is not None:
        db_review.update_comment(review_in.comment)

    commit_or_rollback(db, f"update of review {review_in.id}")
    db.refresh(db_review)
    logger.info(f"Review {review_in.id} updated.")
    return db_review


def delete_review(db: Session, review_id: int) -> bool:
    """
    Permanently deletes a review.

    Raises:
        ReviewNotFoundError: If the review does not exist.
    """
    db_review = get_review_by_id(db, review_id)
    if not db_review:
        logger.warning(f"Attempted delete of non-existent review ID: {review_id}")
        raise ReviewNotFoundError(review_id)

    book_id = db_review.book_id
    db.delete(db_review)
    commit_or_rollback(db, f"delete of review {review_id}")
    logger.info(f"Review {review_id} deleted from book {book_id}.")
    return True
