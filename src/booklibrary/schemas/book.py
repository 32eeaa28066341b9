"""
Esquemas Pydantic para la entidad Book.
Define los modelos de entrada para creación y actualización parcial de libros.
"""

import datetime
from typing import List, Optional

from pydantic import BaseModel


class BookBase(BaseModel):
    """
    Campos opcionales comunes a creación y actualización.

    Atributos:
        isbn (Optional[str]): ISBN; vacío se guarda como None.
        description (Optional[str]): Descripción o sinopsis.
        published_date (Optional[date]): Fecha de publicación.
        page_count (Optional[int]): Número de páginas.
        cover_image_url (Optional[str]): URL de la portada.
        publisher (Optional[str]): Editorial.
        language (Optional[str]): Idioma; "English" si no se indica al crear.
        genre_ids (Optional[List[int]]): IDs de géneros a asociar.
    """
    isbn: Optional[str] = None
    description: Optional[str] = None
    published_date: Optional[datetime.date] = None
    page_count: Optional[int] = None
    cover_image_url: Optional[str] = None
    publisher: Optional[str] = None
    language: Optional[str] = None
    genre_ids: Optional[List[int]] = None


class BookCreate(BookBase):
    title: Optional[str] = None
    author_id: int


class BookUpdate(BookBase):
    """
    Actualización parcial: solo se aplican los campos enviados y no nulos.
    `genre_ids`, si se envía, reemplaza el conjunto completo de géneros.
    """
    id: int
    title: Optional[str] = None
