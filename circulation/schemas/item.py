from datetime import date
from pydantic import BaseModel, ConfigDict, Field, model_validator

from circulation.domain.enums import ItemState


class Item(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    title: str
    author: str
    publication_date: date | None = None
    state: ItemState
    holder: str | None = None
    due_date: date | None = None


class ItemCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=32)
    title: str = Field(..., min_length=1, max_length=255)
    author: str = Field(..., min_length=1, max_length=255)
    publication_date: date | None = None

    @model_validator(mode="after")
    def strip_code(self):
        """Catalog codes are matched exactly, so surrounding whitespace is dropped."""
        self.code = self.code.strip()
        if not self.code:
            raise ValueError("code cannot be blank")
        return self
