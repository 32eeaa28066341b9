"""
Pydantic schemas for Author input.
AuthorUpdate keeps track of which fields the caller actually sent.
"""

import datetime
from typing import Optional

from pydantic import BaseModel


class AuthorBase(BaseModel):
    biography: Optional[str] = None
    date_of_birth: Optional[datetime.date] = None
    nationality: Optional[str] = None
    image_url: Optional[str] = None


class AuthorCreate(AuthorBase):
    """
    Schema for creating an author.

    Attributes:
        name (str): Full name; blank values are rejected by the Author entity.
    """
    name: Optional[str] = None


class AuthorUpdate(AuthorBase):
    """
    Schema for a partial author update. Only fields present in
    `model_fields_set` and not None are applied.
    """
    id: int
    name: Optional[str] = None
