"""
ORM model for the Author entity.
An author owns its books: deleting an author deletes them too.
"""

from typing import Optional

from sqlalchemy import Column, Date, Integer, String
from sqlalchemy.orm import relationship

from booklibrary.core.validation import require_non_blank
from booklibrary.db.session import Base


class Author(Base):
    """
    Represents an author who writes books.

    Attributes:
        id (int): Primary key.
        name (str): Full name, never blank.
        biography (str): Short biography.
        date_of_birth (date): Date of birth.
        nationality (str): Nationality.
        image_url (str): URL of the profile image.
        books (List[Book]): Books written by this author.
    """
    __tablename__ = "authors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), index=True, nullable=False)
    biography = Column(String(2000), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    nationality = Column(String(100), index=True, nullable=True)
    image_url = Column(String(500), nullable=True)

    books = relationship(
        "Book",
        back_populates="author",
        cascade="all, delete-orphan",
        order_by="Book.id",
    )

    def __init__(self, name: Optional[str] = None, **kwargs):
        super().__init__(name=require_non_blank(name, "name"), **kwargs)

    @property
    def book_count(self) -> int:
        return len(self.books)

    def add_book(self, book) -> None:
        if book not in self.books:
            self.books.append(book)

    def remove_book(self, book) -> None:
        """Detaches the book; with delete-orphan it is deleted on the next flush."""
        if book in self.books:
            self.books.remove(book)

    def __repr__(self) -> str:
        return f"<Author(id={self.id}, name='{self.name}')>"
