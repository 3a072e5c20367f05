"""Category response schemas."""

from pydantic import BaseModel


class CategoryResponse(BaseModel):
    id: int
    name: str
    icon: str | None = None
    description: str | None = None
    count: int = 0


class CategoryList(BaseModel):
    categories: list[CategoryResponse]
