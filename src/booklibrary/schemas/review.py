"""
Esquemas Pydantic para la entidad Review.
Define los modelos de entrada para creación y actualización de reseñas.
The rating range is checked by the domain layer so callers get an
InvalidRatingError carrying the rejected value.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr


class ReviewBase(BaseModel):
    """
    Esquema base para una reseña.

    Atributos:
        rating (int): Calificación entre 1 y 5.
        comment (Optional[str]): Comentario opcional de la reseña.
    """
    rating: int
    comment: Optional[str] = None


class ReviewCreate(ReviewBase):
    """
    Esquema para la creación de una reseña.

    Atributos:
        book_id (int): Libro reseñado.
        reviewer_name (str): Nombre de quien escribe la reseña.
        reviewer_email (Optional[EmailStr]): Correo opcional.
    """
    book_id: int
    reviewer_name: Optional[str] = None
    reviewer_email: Optional[EmailStr] = None


class ReviewUpdate(BaseModel):
    id: int
    rating: Optional[int] = None
    comment: Optional[str] = None
