from typing import Optional

from pydantic import BaseModel


class GenreCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
