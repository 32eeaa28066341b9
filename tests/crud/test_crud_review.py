# tests/crud/test_crud_review.py
import datetime

import pytest
from pydantic import ValidationError

from booklibrary.core.exceptions import (
    BlankFieldError,
    BookNotFoundError,
    InvalidRatingError,
    ReviewNotFoundError,
)
from booklibrary.crud import (
    create_review,
    delete_review,
    get_book_by_id,
    get_review_by_id,
    get_reviews,
    get_reviews_by_book_ids,
    get_reviews_by_rating,
    get_reviews_by_reviewer,
    get_reviews_for_book,
    update_review,
)
from booklibrary.models.review import Review
from booklibrary.schemas.review import ReviewCreate, ReviewUpdate


def _review_count(db_session):
    return db_session.query(Review).count()


def test_create_review(db_session, test_book):
    """Test creating a review through the CRUD function."""
    review_in = ReviewCreate(
        book_id=test_book.id,
        rating=5,
        comment="Don't panic.",
        reviewer_name="Alice Johnson",
        reviewer_email="alice.johnson@email.com",
    )

    review = create_review(db_session, review_in)

    assert review.id is not None
    assert review.rating == 5
    assert review.reviewer_email == "alice.johnson@email.com"
    assert review.created_at is not None
    assert review.updated_at is None
    assert review in test_book.reviews


def test_create_review_updates_book_aggregates(db_session, test_book):
    for rating in (5, 4, 4):
        create_review(db_session, ReviewCreate(book_id=test_book.id, rating=rating, reviewer_name="Reader"))

    book = get_book_by_id(db_session, test_book.id)
    assert book.review_count == 3
    assert book.average_rating == 4.33


@pytest.mark.parametrize("rating", [0, 6])
def test_create_review_invalid_rating(db_session, test_book, rating):
    with pytest.raises(InvalidRatingError) as exc_info:
        create_review(db_session, ReviewCreate(book_id=test_book.id, rating=rating, reviewer_name="Reader"))
    assert exc_info.value.rating == rating
    assert _review_count(db_session) == 0


def test_create_review_rating_checked_before_book(db_session):
    with pytest.raises(InvalidRatingError):
        create_review(db_session, ReviewCreate(book_id=9999, rating=7, reviewer_name="Reader"))


def test_create_review_unknown_book(db_session):
    with pytest.raises(BookNotFoundError) as exc_info:
        create_review(db_session, ReviewCreate(book_id=9999, rating=3, reviewer_name="Reader"))
    assert exc_info.value.book_id == 9999
    assert _review_count(db_session) == 0


def test_create_review_blank_reviewer(db_session, test_book):
    with pytest.raises(BlankFieldError):
        create_review(db_session, ReviewCreate(book_id=test_book.id, rating=3, reviewer_name=" "))
    assert _review_count(db_session) == 0


def test_review_create_rejects_malformed_email():
    with pytest.raises(ValidationError):
        ReviewCreate(book_id=1, rating=3, reviewer_name="Reader", reviewer_email="not-an-email")


def test_update_review_rating_and_comment(db_session, test_book, make_review):
    review = make_review(test_book, 2, comment="Meh")

    updated = update_review(db_session, ReviewUpdate(id=review.id, rating=4, comment="Grew on me"))

    assert updated.rating == 4
    assert updated.comment == "Grew on me"
    assert updated.updated_at is not None


def test_update_review_comment_only_keeps_rating(db_session, test_book, make_review):
    review = make_review(test_book, 3)

    updated = update_review(db_session, ReviewUpdate(id=review.id, comment="Second thoughts"))

    assert updated.rating == 3
    assert updated.comment == "Second thoughts"
    assert updated.updated_at is not None


def test_update_review_without_changes_does_not_stamp(db_session, test_book, make_review):
    review = make_review(test_book, 3)

    updated = update_review(db_session, ReviewUpdate(id=review.id))

    assert updated.updated_at is None


def test_update_review_invalid_rating(db_session, test_book, make_review):
    review = make_review(test_book, 3)

    with pytest.raises(InvalidRatingError):
        update_review(db_session, ReviewUpdate(id=review.id, rating=0))

    db_session.refresh(review)
    assert review.rating == 3
    assert review.updated_at is None


def test_update_review_not_found(db_session):
    with pytest.raises(ReviewNotFoundError) as exc_info:
        update_review(db_session, ReviewUpdate(id=9999, rating=3))
    assert exc_info.value.review_id == 9999


def test_delete_review(db_session, test_book, make_review):
    keep = make_review(test_book, 5)
    drop = make_review(test_book, 1)
    drop_id = drop.id

    assert delete_review(db_session, drop_id) is True

    assert get_review_by_id(db_session, drop_id) is None
    book = get_book_by_id(db_session, test_book.id)
    assert book.reviews == [keep]
    assert book.average_rating == 5.0


def test_delete_review_not_found(db_session):
    with pytest.raises(ReviewNotFoundError):
        delete_review(db_session, 9999)


def test_review_queries(db_session, test_book, make_review):
    now = datetime.datetime.now(datetime.timezone.utc)
    older = make_review(test_book, 4, reviewer_name="Alice Johnson")
    older.created_at = now - datetime.timedelta(days=3)
    newer = make_review(test_book, 2, reviewer_name="Bob Smith")
    newer.created_at = now - datetime.timedelta(days=1)
    db_session.flush()

    assert get_reviews(db_session) == [newer, older]
    assert get_reviews_for_book(db_session, test_book.id) == [newer, older]
    assert get_reviews_for_book(db_session, 9999) == []
    assert get_reviews_by_reviewer(db_session, "alice") == [older]
    assert get_reviews_by_rating(db_session, 2) == [newer]
    assert get_reviews_by_book_ids(db_session, [test_book.id]) == {test_book.id: [older, newer]}
