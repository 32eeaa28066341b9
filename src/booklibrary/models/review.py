# src/booklibrary/models/review.py
import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from booklibrary.core.validation import require_non_blank, validate_rating
from booklibrary.db.session import Base


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True)
    rating = Column(Integer, nullable=False, index=True)
    comment = Column(String(2000), nullable=True)
    reviewer_name = Column(String(100), nullable=False)
    reviewer_email = Column(String(200), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    # Only set by update_rating / update_comment.
    updated_at = Column(DateTime(timezone=True), nullable=True)
    book_id = Column(Integer, ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True)

    book = relationship("Book", back_populates="reviews")

    __table_args__ = (
        # Ensure rating is between 1 and 5
        CheckConstraint('rating >= 1 AND rating <= 5', name='review_rating_check'),
    )

    def __init__(self, rating: int, reviewer_name: Optional[str] = None, **kwargs):
        validate_rating(rating)
        require_non_blank(reviewer_name, "reviewer_name")
        if kwargs.get("created_at") is None:
            kwargs["created_at"] = utcnow()
        super().__init__(rating=rating, reviewer_name=reviewer_name, **kwargs)

    def update_rating(self, new_rating: int) -> None:
        """Validates and applies a new rating, stamping updated_at."""
        validate_rating(new_rating)
        self.rating = new_rating
        self.updated_at = utcnow()

    def update_comment(self, new_comment: Optional[str]) -> None:
        self.comment = new_comment
        self.updated_at = utcnow()

    def __repr__(self):
        return f"<Review(id={self.id}, book_id={self.book_id}, rating={self.rating}, reviewer='{self.reviewer_name}')>"
