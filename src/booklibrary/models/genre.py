from typing import Optional

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from booklibrary.core.validation import require_non_blank
from booklibrary.db.session import Base


class Genre(Base):
    """A book genre. Names are unique; books and genres never delete each other."""
    __tablename__ = "genres"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, index=True, nullable=False)
    description = Column(String(500), nullable=True)

    books = relationship(
        "Book",
        secondary="book_genres",
        back_populates="genres",
        order_by="Book.id",
    )

    def __init__(self, name: Optional[str] = None, **kwargs):
        super().__init__(name=require_non_blank(name, "name"), **kwargs)

    def __repr__(self) -> str:
        return f"<Genre(id={self.id}, name='{self.name}')>"
